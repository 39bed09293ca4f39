"""Tests for the vectorized rating engine."""

from __future__ import annotations

import chex
import jax.numpy as jnp

from skillr.batch import RatingBatch, probs_batch, rate_batch
from skillr.engine import probs, rate
from skillr.model import DEFAULT_CONFIG, Outcome, Rating, SkillrConfig

_P1 = [
    Rating(25.0, 25.0 / 3.0),
    Rating(30.0, 2.0),
    Rating(18.0, 4.0),
    Rating(25.0, 25.0 / 3.0),
]
_P2 = [
    Rating(25.0, 25.0 / 3.0),
    Rating(20.0, 6.0),
    Rating(26.0, 1.5),
    Rating(25.0, 25.0 / 3.0),
]
_OUTCOMES = [Outcome.WIN, Outcome.LOSS, Outcome.WIN, Outcome.DRAW]


def test_rating_batch_roundtrip() -> None:
    """Ratings survive stacking into arrays and back."""
    batch = RatingBatch.from_ratings(_P2)
    assert batch.location.shape == (4,)
    assert batch.scale.shape == (4,)
    restored = batch.to_ratings()
    for before, after in zip(_P2, restored, strict=True):
        assert abs(before.location - after.location) < 1e-5
        assert abs(before.scale - after.scale) < 1e-5


def test_probs_batch_matches_scalar_engine() -> None:
    """Batched probabilities agree with the scalar model."""
    got = probs_batch(
        RatingBatch.from_ratings(_P1), RatingBatch.from_ratings(_P2)
    )
    expected = jnp.asarray(
        [probs(a, b) for a, b in zip(_P1, _P2, strict=True)],
        dtype=jnp.float32,
    )
    assert got.shape == (4, 3)
    chex.assert_trees_all_close(got, expected, rtol=1e-5, atol=1e-6)
    chex.assert_trees_all_close(
        got.sum(axis=-1), jnp.ones((4,), dtype=jnp.float32), atol=1e-6
    )


def test_rate_batch_matches_scalar_engine() -> None:
    """Batched updates agree element-wise with the scalar engine."""
    cfg = SkillrConfig(p_draw=0.2, entropy_rate=0.3)
    outcomes = jnp.asarray([int(o) for o in _OUTCOMES])
    new1, new2 = rate_batch(
        RatingBatch.from_ratings(_P1),
        RatingBatch.from_ratings(_P2),
        outcomes,
        cfg,
    )

    expected = [
        rate(a, b, o, cfg)
        for a, b, o in zip(_P1, _P2, _OUTCOMES, strict=True)
    ]
    exp1 = RatingBatch.from_ratings([pair[0] for pair in expected])
    exp2 = RatingBatch.from_ratings([pair[1] for pair in expected])

    chex.assert_trees_all_close(new1.location, exp1.location, rtol=1e-5)
    chex.assert_trees_all_close(new1.scale, exp1.scale, rtol=1e-5)
    chex.assert_trees_all_close(new2.location, exp2.location, rtol=1e-5)
    chex.assert_trees_all_close(new2.scale, exp2.scale, rtol=1e-5)


def test_rate_batch_default_config_win() -> None:
    """A batched win at the default prior moves both sides apart."""
    prior = RatingBatch.from_ratings([Rating.default()])
    new1, new2 = rate_batch(prior, prior, jnp.asarray([1]), DEFAULT_CONFIG)
    assert float(new1.location[0]) > 25.0
    assert float(new2.location[0]) < 25.0
    assert float(new1.scale[0]) < 25.0 / 3.0
    assert float(new2.scale[0]) < 25.0 / 3.0

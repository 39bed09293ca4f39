"""
Vectorized rating updates over arrays of independent matches.

Same model as ``skillr.engine`` expressed with jax.numpy so that many
matches can be scored or rated in a single jitted call. Results follow
JAX's default dtype (float32 unless x64 is enabled).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import partial

import jax
import jax.numpy as jnp

from skillr.model import DEFAULT_CONFIG, Rating, SkillrConfig
from skillr_types import Array


@dataclass(frozen=True, slots=True)
class RatingBatch:
    """Structure-of-arrays view of many ratings.

    Attributes:
        location: Locations, shape (N,).
        scale: Scales, shape (N,).
    """

    location: Array  # (N,)
    scale: Array  # (N,)

    @staticmethod
    def from_ratings(ratings: Sequence[Rating]) -> RatingBatch:
        """Stack a sequence of Rating values into arrays."""
        return RatingBatch(
            location=jnp.asarray([r.location for r in ratings]),
            scale=jnp.asarray([r.scale for r in ratings]),
        )

    def to_ratings(self) -> list[Rating]:
        """Unstack into a list of Rating values."""
        return [
            Rating(location=float(loc), scale=float(scale))
            for loc, scale in zip(
                self.location.tolist(), self.scale.tolist(), strict=True
            )
        ]


def probs_batch(
    r1: RatingBatch, r2: RatingBatch, cfg: SkillrConfig = DEFAULT_CONFIG
) -> Array:
    """Return win/draw/lose probabilities for each pair, shape (N, 3)."""
    _, _, p = _rate_arrays(
        r1.location,
        r1.scale,
        r2.location,
        r2.scale,
        jnp.zeros_like(r1.location, dtype=jnp.int32),
        cfg,
    )
    return p


def rate_batch(
    r1: RatingBatch,
    r2: RatingBatch,
    outcomes: Array,
    cfg: SkillrConfig = DEFAULT_CONFIG,
) -> tuple[RatingBatch, RatingBatch]:
    """Rate N independent matches at once.

    Args:
        r1: Ratings of competitor 1 per match.
        r2: Ratings of competitor 2 per match.
        outcomes: Integer outcomes from competitor 1's side (1, 0, -1).
        cfg: Model constants.

    Returns:
        Updated (r1, r2) batches.
    """
    new1, new2, _ = _rate_arrays(
        r1.location,
        r1.scale,
        r2.location,
        r2.scale,
        jnp.asarray(outcomes, dtype=jnp.int32),
        cfg,
    )
    return RatingBatch(*new1), RatingBatch(*new2)


@partial(jax.jit, static_argnames=("cfg",))
def _rate_arrays(
    loc1: Array,
    scale1: Array,
    loc2: Array,
    scale2: Array,
    outcomes: Array,
    cfg: SkillrConfig,
) -> tuple[tuple[Array, Array], tuple[Array, Array], Array]:
    """Jitted core shared by probs_batch and rate_batch."""
    d_loc = loc1 - loc2
    s_diff = jnp.sqrt(scale1**2 + scale2**2 + 2.0 * cfg.beta**2)

    z = jax.nn.sigmoid((cfg.p_draw - d_loc) / s_diff)
    p_win = 1.0 - z
    p_lose = jax.nn.sigmoid((-cfg.p_draw - d_loc) / s_diff)
    p_draw = z - p_lose

    new1 = _update(loc1, scale1, s_diff, p_win, p_draw, p_lose, outcomes, cfg)
    # Competitor 2: mirrored probabilities, negated outcome.
    new2 = _update(loc2, scale2, s_diff, p_lose, p_draw, p_win, -outcomes, cfg)
    return new1, new2, jnp.stack([p_win, p_draw, p_lose], axis=-1)


def _update(
    loc: Array,
    scale: Array,
    s_diff: Array,
    p_win: Array,
    p_draw: Array,
    p_lose: Array,
    outcomes: Array,
    cfg: SkillrConfig,
) -> tuple[Array, Array]:
    """Element-wise update rule for one side of each match."""
    p = jnp.where(outcomes > 0, p_win, jnp.where(outcomes < 0, p_lose, p_draw))
    o = jnp.sign(outcomes).astype(loc.dtype)
    expectation = p_win - p_lose
    information_gain = -jnp.log(p)
    k = scale**2 / s_diff**2
    new_loc = loc + k * (o - expectation)
    new_entropy = jnp.log(scale) + 2.0 - cfg.entropy_rate * information_gain
    new_scale = jnp.exp(new_entropy - 2.0)
    return new_loc, jnp.sqrt(new_scale**2 + cfg.tau**2)

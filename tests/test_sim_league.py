"""Tests for seeded league simulation."""

from __future__ import annotations

import jax
import pytest

from rng import RngStream
from sim.league import MatchRecord, sample_outcome, simulate_league
from skillr.model import DEFAULT_CONFIG, Outcome


def test_match_record_summary() -> None:
    """MatchRecord aggregates wins/draws/losses correctly."""
    record = MatchRecord(wins=3, draws=2, losses=1)
    assert record.total_games() == 6
    assert record.score() == 4.0
    assert record.win_rate() == 0.5


def test_match_record_empty_and_record() -> None:
    """Empty records have zero win rate; record() returns a new tally."""
    empty = MatchRecord()
    assert empty.total_games() == 0
    assert empty.win_rate() == 0.0

    updated = empty.record(Outcome.WIN).record(Outcome.DRAW)
    assert updated == MatchRecord(wins=1, draws=1, losses=0)
    assert empty == MatchRecord()


def test_sample_outcome_follows_model() -> None:
    """A near-certain result is always sampled."""
    for seed in range(5):
        key = jax.random.PRNGKey(seed)
        outcome = sample_outcome(key, 1000.0, 0.0, DEFAULT_CONFIG)
        assert outcome is Outcome.WIN


def test_simulate_league_is_deterministic() -> None:
    """The same seed reproduces the same league."""
    skills = [15.0, 25.0, 35.0]
    first = simulate_league(skills, DEFAULT_CONFIG, 30, RngStream.from_seed(1))
    second = simulate_league(
        skills, DEFAULT_CONFIG, 30, RngStream.from_seed(1)
    )
    other = simulate_league(skills, DEFAULT_CONFIG, 30, RngStream.from_seed(2))
    assert first == second
    assert first != other


def test_simulate_league_ranks_stronger_player_higher() -> None:
    """A much stronger player ends with the higher location."""
    result = simulate_league(
        [10.0, 40.0], DEFAULT_CONFIG, 60, RngStream.from_seed(0)
    )
    weak, strong = result.ratings
    assert strong.location > DEFAULT_CONFIG.loc > weak.location
    assert strong.scale < DEFAULT_CONFIG.scale
    # Every round involves both players.
    assert [r.total_games() for r in result.records] == [60, 60]
    assert result.records[1].wins > result.records[0].wins


def test_simulate_league_tallies_balance() -> None:
    """Wins and losses balance across the league."""
    result = simulate_league(
        [20.0, 25.0, 30.0, 35.0], DEFAULT_CONFIG, 40, RngStream.from_seed(3)
    )
    assert sum(r.total_games() for r in result.records) == 80
    assert sum(r.wins for r in result.records) == sum(
        r.losses for r in result.records
    )


def test_simulate_league_zero_rounds_returns_priors() -> None:
    """Without matches every player keeps the configured prior."""
    result = simulate_league(
        [1.0, 2.0], DEFAULT_CONFIG, 0, RngStream.from_seed(0)
    )
    assert result.ratings == (DEFAULT_CONFIG.rating(), DEFAULT_CONFIG.rating())
    assert result.records == (MatchRecord(), MatchRecord())


def test_simulate_league_rejects_bad_arguments() -> None:
    """Too few players or negative rounds raise ValueError."""
    with pytest.raises(ValueError, match="two players"):
        _ = simulate_league([1.0], DEFAULT_CONFIG, 1, RngStream.from_seed(0))
    with pytest.raises(ValueError, match="non-negative"):
        _ = simulate_league(
            [1.0, 2.0], DEFAULT_CONFIG, -1, RngStream.from_seed(0)
        )

"""
Seeded synthetic leagues for sanity-checking the rating model.

Each player has a hidden true skill. Every round one random pair plays, the
result is sampled from the probability model evaluated on the true skills,
and the public ratings are updated with the scalar engine.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Final

import jax
import jax.numpy as jnp

from rng import RngStream
from skillr.engine import probs, rate
from skillr.model import Outcome, Rating, SkillrConfig
from skillr_types import PlayerId, Round

# Hidden skills are point masses; only beta contributes match noise.
TRUE_SKILL_SCALE: Final[float] = 1e-6
# Categorical index order matches the probability triple.
_OUTCOMES: Final[tuple[Outcome, Outcome, Outcome]] = (
    Outcome.WIN,
    Outcome.DRAW,
    Outcome.LOSS,
)


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """Per-player tally of simulated results."""

    wins: int = 0
    draws: int = 0
    losses: int = 0

    def total_games(self) -> int:
        """Return total number of games."""
        return self.wins + self.draws + self.losses

    def score(self) -> float:
        """Return score with draws worth 0.5."""
        return float(self.wins) + 0.5 * float(self.draws)

    def win_rate(self) -> float:
        """Return win rate across all games."""
        # Avoid division by zero on empty records.
        total = self.total_games()
        if total == 0:
            return 0.0
        return float(self.wins) / float(total)

    def record(self, outcome: Outcome) -> MatchRecord:
        """Return a new record with one more result added."""
        match outcome:
            case Outcome.WIN:
                return replace(self, wins=self.wins + 1)
            case Outcome.DRAW:
                return replace(self, draws=self.draws + 1)
            case Outcome.LOSS:
                return replace(self, losses=self.losses + 1)


@dataclass(frozen=True, slots=True)
class LeagueResult:
    """Final public ratings and tallies, indexed by player id."""

    ratings: tuple[Rating, ...]
    records: tuple[MatchRecord, ...]


def sample_outcome(
    key: jax.Array, true1: float, true2: float, cfg: SkillrConfig
) -> Outcome:
    """Draw a match result for player 1 from the model on true skills."""
    ps = probs(
        Rating(location=true1, scale=TRUE_SKILL_SCALE),
        Rating(location=true2, scale=TRUE_SKILL_SCALE),
        cfg,
    )
    idx = jax.random.categorical(key, jnp.log(jnp.asarray(ps)))
    return _OUTCOMES[int(idx)]


def simulate_league(
    true_skills: Sequence[float],
    cfg: SkillrConfig,
    rounds: int,
    stream: RngStream,
) -> LeagueResult:
    """Run a seeded league and return the final ratings.

    Args:
        true_skills: Hidden skill per player; index is the player id.
        cfg: Model constants; every player starts at ``cfg.rating()``.
        rounds: Number of matches to play.
        stream: RNG stream; the same stream gives the same league.

    Returns:
        LeagueResult with one rating and one record per player.

    Raises:
        ValueError: If fewer than two players or a negative round count.
    """
    n_players = len(true_skills)
    if n_players < 2:
        raise ValueError("a league needs at least two players")
    if rounds < 0:
        raise ValueError(f"rounds must be non-negative, got {rounds}")

    ratings = [cfg.rating() for _ in range(n_players)]
    records = [MatchRecord() for _ in range(n_players)]

    for round_idx in range(rounds):
        round_key = stream.key_for_round(Round(round_idx))
        pairing_key, outcome_key = stream.split_round_key(round_key)
        p1, p2 = _pair(pairing_key, n_players)
        outcome = sample_outcome(
            outcome_key, true_skills[p1], true_skills[p2], cfg
        )
        ratings[p1], ratings[p2] = rate(ratings[p1], ratings[p2], outcome, cfg)
        records[p1] = records[p1].record(outcome)
        records[p2] = records[p2].record(outcome.invert())

    return LeagueResult(ratings=tuple(ratings), records=tuple(records))


def _pair(key: jax.Array, n_players: int) -> tuple[PlayerId, PlayerId]:
    """Pick two distinct players uniformly at random."""
    perm = jax.random.permutation(key, n_players)
    return PlayerId(int(perm[0])), PlayerId(int(perm[1]))

"""
Deterministic RNG utilities for league simulation.

All randomness flows through explicit PRNGKey passing.
"""

from __future__ import annotations

from dataclasses import dataclass

import jax

from skillr_types import PRNGKey, Round


@dataclass(frozen=True, slots=True)
class RngStream:
    """A deterministic RNG stream derived from a base key.

    Purely functional: methods return new keys without mutating state.
    """

    base_key: PRNGKey

    @staticmethod
    def from_seed(seed: int) -> RngStream:
        """Build a stream from an integer seed."""
        return RngStream(base_key=jax.random.PRNGKey(seed))

    def key_for_round(self, round_idx: Round) -> PRNGKey:
        """Derive the key for one simulation round via fold_in."""
        return jax.random.fold_in(self.base_key, int(round_idx))

    def split_round_key(self, round_key: PRNGKey) -> tuple[PRNGKey, PRNGKey]:
        """Split a round key into (pairing_key, outcome_key)."""
        pairing_key, outcome_key = jax.random.split(round_key)
        return pairing_key, outcome_key

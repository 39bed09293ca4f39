"""
Value types for the rating engine.

All types are immutable: updates always produce fresh instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

# Default prior and model constants.
DEFAULT_LOC: Final[float] = 25.0
DEFAULT_SCALE: Final[float] = 25.0 / 3.0


@dataclass(frozen=True, slots=True)
class Rating:
    """Gaussian skill belief for one competitor.

    Attributes:
        location: Mean skill estimate (unbounded).
        scale: Standard deviation of the belief, strictly positive.
    """

    location: float = DEFAULT_LOC
    scale: float = DEFAULT_SCALE

    @staticmethod
    def default() -> Rating:
        """Return the default prior rating."""
        return Rating(location=DEFAULT_LOC, scale=DEFAULT_SCALE)


class Outcome(Enum):
    """Match result from the perspective of one competitor."""

    WIN = 1
    DRAW = 0
    LOSS = -1

    def invert(self) -> Outcome:
        """Return the same result seen from the opponent's side."""
        match self:
            case Outcome.WIN:
                return Outcome.LOSS
            case Outcome.DRAW:
                return Outcome.DRAW
            case Outcome.LOSS:
                return Outcome.WIN

    @property
    def label(self) -> str:
        """Human-readable label ("Win", "Draw" or "Loss")."""
        return self.name.capitalize()

    def __int__(self) -> int:
        return int(self.value)

    def __str__(self) -> str:
        return self.label

    @staticmethod
    def from_label(text: str) -> Outcome:
        """Parse a label such as "win" or "Loss".

        Raises:
            ValueError: If the label is not a known outcome.
        """
        key = text.strip().upper()
        try:
            return Outcome[key]
        except KeyError:
            raise ValueError(f"unknown outcome label: {text!r}") from None

    @staticmethod
    def from_int(value: int) -> Outcome:
        """Parse the integer encoding (1 win, 0 draw, -1 loss)."""
        return Outcome(value)


@dataclass(frozen=True, slots=True)
class SkillrConfig:
    """Model constants shared by every rating update.

    Attributes:
        loc: Prior location for new competitors.
        scale: Prior scale for new competitors.
        beta: Per-match performance noise, must be > 0.
        tau: Process noise re-added to the scale after each update, >= 0.
        p_draw: Draw margin width in the probability model, in [0, 1).
        entropy_rate: Scale shrinkage per unit of information gain, >= 0.
    """

    loc: float = DEFAULT_LOC
    scale: float = DEFAULT_SCALE
    beta: float = 25.0 / 6.0
    tau: float = 25.0 / 300.0
    p_draw: float = 0.1
    entropy_rate: float = 0.1

    def rating(self) -> Rating:
        """Return the prior rating described by this configuration."""
        return Rating(location=self.loc, scale=self.scale)


DEFAULT_CONFIG: Final[SkillrConfig] = SkillrConfig()

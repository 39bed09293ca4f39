"""
Bayesian pairwise skill ratings.
"""

from skillr.engine import probs, rate, update_rating
from skillr.model import DEFAULT_CONFIG, Outcome, Rating, SkillrConfig

__all__ = [
    "DEFAULT_CONFIG",
    "Outcome",
    "Rating",
    "SkillrConfig",
    "probs",
    "rate",
    "update_rating",
]

"""
Pairwise rating updates.

The model is a logistic draw-margin model over the location gap of two
Gaussian skill beliefs. Preconditions (strictly positive scales and beta)
are the caller's responsibility and are only checked by debug assertions.
"""

from __future__ import annotations

import math
from typing import TypeAlias

from skillr.model import DEFAULT_CONFIG, Outcome, Rating, SkillrConfig

ProbTriple: TypeAlias = tuple[float, float, float]


def rate(
    p1: Rating,
    p2: Rating,
    outcome: Outcome,
    cfg: SkillrConfig = DEFAULT_CONFIG,
) -> tuple[Rating, Rating]:
    """Return updated ratings for both competitors after one match.

    Args:
        p1: Rating of competitor 1.
        p2: Rating of competitor 2.
        outcome: Result from competitor 1's perspective.
        cfg: Model constants.

    Returns:
        (new_p1, new_p2) in input order.
    """
    d_loc, s_diff = _gap(p1, p2, cfg)
    p_win, p_draw, p_lose = _probs(d_loc, s_diff, cfg)
    new_p1 = update_rating(p1, s_diff, (p_win, p_draw, p_lose), outcome, cfg)
    # Competitor 2 sees mirrored probabilities and the inverted outcome.
    new_p2 = update_rating(
        p2, s_diff, (p_lose, p_draw, p_win), outcome.invert(), cfg
    )
    return new_p1, new_p2


def probs(
    p1: Rating, p2: Rating, cfg: SkillrConfig = DEFAULT_CONFIG
) -> ProbTriple:
    """Return (p_win, p_draw, p_lose) from competitor 1's perspective."""
    d_loc, s_diff = _gap(p1, p2, cfg)
    return _probs(d_loc, s_diff, cfg)


def update_rating(
    rating: Rating,
    s_diff: float,
    ps: ProbTriple,
    outcome: Outcome,
    cfg: SkillrConfig,
) -> Rating:
    """Apply the update rule to a single competitor.

    Args:
        rating: Current rating of the competitor.
        s_diff: Combined uncertainty used to compute ``ps``.
        ps: (p_win, p_draw, p_lose) from this competitor's perspective.
        outcome: Realized result from this competitor's perspective.
        cfg: Model constants.

    Returns:
        New Rating with moved location and entropy-shrunk scale.
    """
    p_win, p_draw, p_lose = ps
    match outcome:
        case Outcome.WIN:
            p, o = p_win, 1.0
        case Outcome.DRAW:
            p, o = p_draw, 0.0
        case Outcome.LOSS:
            p, o = p_lose, -1.0

    expectation = p_win - p_lose
    information_gain = _surprise(p)
    # Share of the combined variance owned by this competitor.
    k = rating.scale**2 / s_diff**2
    new_loc = _update_loc(rating.location, k, o, expectation)
    new_scale = _update_scale(rating.scale, information_gain, cfg)
    return Rating(
        location=new_loc,
        scale=math.sqrt(new_scale**2 + cfg.tau**2),
    )


def _gap(p1: Rating, p2: Rating, cfg: SkillrConfig) -> tuple[float, float]:
    """Return the signed location gap and combined uncertainty."""
    assert p1.scale > 0.0 and p2.scale > 0.0, "scales must be positive"
    assert cfg.beta > 0.0, "beta must be positive"
    d_loc = p1.location - p2.location
    s_diff = math.sqrt(p1.scale**2 + p2.scale**2 + 2.0 * cfg.beta**2)
    return d_loc, s_diff


def _probs(d_loc: float, s_diff: float, cfg: SkillrConfig) -> ProbTriple:
    """Split the logistic CDF at +/- p_draw into win, draw and lose mass."""
    # z is the mass below the upper margin; the rest is a win.
    z = _fd(cfg.p_draw, d_loc, s_diff)
    p_win = 1.0 - z
    # Mass below the lower margin is a loss.
    p_lose = _fd(-cfg.p_draw, d_loc, s_diff)
    # z >= p_lose because _sigma is monotone in floating point.
    p_draw = z - p_lose
    return p_win, p_draw, p_lose


def _fd(x: float, d_loc: float, s_diff: float) -> float:
    """Logistic CDF of the performance gap, centred on d_loc."""
    return _sigma((x - d_loc) / s_diff)


def _sigma(z: float) -> float:
    """Standard logistic function; saturates to 0.0 where exp overflows."""
    try:
        ez = math.exp(-z)
    except OverflowError:
        # IEEE would give 1 / (1 + inf) == 0.
        return 0.0
    return 1.0 / (1.0 + ez)


def _surprise(p: float) -> float:
    """Negative log-probability; an impossible outcome is infinitely surprising."""
    # Mirror IEEE ln(0) = -inf instead of raising.
    if p <= 0.0:
        return math.inf
    return -math.log(p)


def _update_loc(loc: float, k: float, o: float, expectation: float) -> float:
    """Move the location toward the realized outcome by gain k."""
    # o - expectation is the residual in [-2, 2].
    return loc + k * (o - expectation)


def _update_scale(
    scale: float, information_gain: float, cfg: SkillrConfig
) -> float:
    """Shrink the scale through its entropy proxy ln(scale) + 2."""
    entropy = math.log(scale) + 2.0
    new_entropy = entropy - cfg.entropy_rate * information_gain
    return math.exp(new_entropy - 2.0)

"""
Build SkillrConfig from an optional ``[model]`` TOML table.
"""

from __future__ import annotations

import math
from dataclasses import fields

from skillr.model import DEFAULT_CONFIG, SkillrConfig
from toml_io import TomlValue


def parse_skillr_config(
    table: dict[str, TomlValue] | None,
) -> SkillrConfig:
    """Parse model constants, falling back to defaults for missing keys.

    Args:
        table: The ``[model]`` table, or None to use all defaults.

    Returns:
        Validated SkillrConfig.

    Raises:
        ValueError: On unknown keys, non-numeric values or values outside
            the model's valid ranges.
    """
    if table is None:
        return DEFAULT_CONFIG

    known = {f.name for f in fields(SkillrConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ValueError(f"Unknown model keys: {', '.join(unknown)}")

    cfg = SkillrConfig(
        loc=_get_float_or(table, "loc", DEFAULT_CONFIG.loc),
        scale=_get_float_or(table, "scale", DEFAULT_CONFIG.scale),
        beta=_get_float_or(table, "beta", DEFAULT_CONFIG.beta),
        tau=_get_float_or(table, "tau", DEFAULT_CONFIG.tau),
        p_draw=_get_float_or(table, "p_draw", DEFAULT_CONFIG.p_draw),
        entropy_rate=_get_float_or(
            table, "entropy_rate", DEFAULT_CONFIG.entropy_rate
        ),
    )
    _check_ranges(cfg)
    return cfg


def skillr_config_to_toml(cfg: SkillrConfig) -> dict[str, TomlValue]:
    """Return the configuration as a ``[model]``-shaped TOML table."""
    return {f.name: float(getattr(cfg, f.name)) for f in fields(cfg)}


def _get_float_or(
    table: dict[str, TomlValue], key: str, default: float
) -> float:
    """Fetch an optional float from a TOML table.

    Raises:
        ValueError: If the key is present but not numeric.
    """
    value = table.get(key)
    if value is None:
        return default
    # bool is an int subclass but never a valid model constant.
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"Model key {key} must be a number")
    return float(value)


def _check_ranges(cfg: SkillrConfig) -> None:
    """Reject constants that break the model's preconditions."""
    # NaN compares False everywhere, so reject non-finite values first.
    for f in fields(cfg):
        if not math.isfinite(getattr(cfg, f.name)):
            raise ValueError(f"model.{f.name} must be finite")
    if cfg.scale <= 0.0:
        raise ValueError("model.scale must be > 0")
    if cfg.beta <= 0.0:
        raise ValueError("model.beta must be > 0")
    if cfg.tau < 0.0:
        raise ValueError("model.tau must be >= 0")
    if not 0.0 <= cfg.p_draw < 1.0:
        raise ValueError("model.p_draw must be in [0, 1)")
    if cfg.entropy_rate < 0.0:
        raise ValueError("model.entropy_rate must be >= 0")

"""
Command-line entrypoints.

Commands:
- rate: update two ratings after one match
- probs: win/draw/loss probabilities for a pairing
- simulate: seeded synthetic league

Every command prints a TOML document on stdout: a [run] event table, the
effective [model] constants and the command results. Nothing is persisted.
"""

from __future__ import annotations

import argparse
import math
import platform
import sys
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from rng import RngStream
from sim.league import simulate_league
from skillr.config import parse_skillr_config, skillr_config_to_toml
from skillr.engine import probs, rate
from skillr.model import Outcome, Rating, SkillrConfig
from toml_io import TomlValue, dump_toml, load_toml


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(prog="skillr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rate_parser = subparsers.add_parser("rate", help="Rate a single match")
    _add_pair_args(rate_parser)
    rate_parser.add_argument(
        "--outcome",
        type=Outcome.from_label,
        required=True,
        metavar="{win,draw,loss}",
        help="Result from competitor 1's perspective",
    )

    probs_parser = subparsers.add_parser(
        "probs", help="Win/draw/loss probabilities for a pairing"
    )
    _add_pair_args(probs_parser)

    sim_parser = subparsers.add_parser(
        "simulate", help="Run a seeded synthetic league"
    )
    sim_parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to TOML config with a [simulate] table",
    )

    return parser


def _add_pair_args(parser: argparse.ArgumentParser) -> None:
    """Attach the shared --p1/--p2/--config options."""
    parser.add_argument(
        "--p1",
        type=parse_rating,
        default=None,
        metavar="LOC,SCALE",
        help="Competitor 1 rating (default: model prior)",
    )
    parser.add_argument(
        "--p2",
        type=parse_rating,
        default=None,
        metavar="LOC,SCALE",
        help="Competitor 2 rating (default: model prior)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional TOML config with a [model] table",
    )


def parse_rating(text: str) -> Rating:
    """Parse a ``LOC,SCALE`` command-line value.

    Raises:
        argparse.ArgumentTypeError: If the value is malformed, non-finite
            or scale <= 0.
    """
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(
            f"expected LOC,SCALE but got {text!r}"
        )
    try:
        location, scale = float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"non-numeric rating: {text!r}"
        ) from None
    # float() accepts "nan" and "inf"; neither is a usable rating.
    if not (math.isfinite(location) and math.isfinite(scale)):
        raise argparse.ArgumentTypeError(f"rating must be finite: {text!r}")
    if scale <= 0.0:
        raise argparse.ArgumentTypeError(f"scale must be > 0: {text!r}")
    return Rating(location=location, scale=scale)


@dataclass(frozen=True, slots=True)
class SimulateConfig:
    """League simulation settings.

    Attributes:
        seed: Base RNG seed.
        rounds: Number of matches to play.
        skills: Hidden true skill per player.
    """

    seed: int
    rounds: int
    skills: tuple[float, ...]


def _get_int(table: dict[str, TomlValue], key: str) -> int:
    """Fetch a required integer from a TOML table.

    Raises:
        ValueError: If the key is missing or not an int.
    """
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Missing int key: {key}")
    return value


def _get_float_list(table: dict[str, TomlValue], key: str) -> list[float]:
    """Fetch a required list of numbers from a TOML table.

    Raises:
        ValueError: If the key is missing or holds non-numeric items.
    """
    value = table.get(key)
    if not isinstance(value, list):
        raise ValueError(f"Missing list key: {key}")
    numbers: list[float] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int | float):
            raise ValueError(f"Non-numeric item in {key}: {item!r}")
        numbers.append(float(item))
    return numbers


def _get_table_optional(
    data: dict[str, TomlValue], key: str
) -> dict[str, TomlValue] | None:
    """Fetch an optional TOML table.

    Raises:
        ValueError: If the key exists but is not a table.
    """
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"Missing TOML table: {key}")
    return value


def _get_table(data: dict[str, TomlValue], key: str) -> dict[str, TomlValue]:
    """Fetch a required TOML table.

    Raises:
        ValueError: If the key is missing or not a table.
    """
    value = _get_table_optional(data, key)
    if value is None:
        raise ValueError(f"Missing TOML table: {key}")
    return value


def _parse_simulate_config(config: dict[str, TomlValue]) -> SimulateConfig:
    """Parse the [simulate] table."""
    table = _get_table(config, "simulate")
    return SimulateConfig(
        seed=_get_int(table, "seed"),
        rounds=_get_int(table, "rounds"),
        skills=tuple(_get_float_list(table, "skills")),
    )


def _load_config(path: Path | None) -> dict[str, TomlValue]:
    """Load the TOML config, or an empty document when no path is given."""
    if path is None:
        return {}
    return load_toml(path)


def _run_event(command: str) -> dict[str, TomlValue]:
    """Describe this invocation the way run start events are recorded."""
    return {
        "event": command,
        "started_utc": datetime.now(UTC).isoformat(),
        "host": platform.node(),
        "python": platform.python_version(),
    }


def _rating_table(rating: Rating) -> dict[str, TomlValue]:
    """Render a rating as a TOML table."""
    return {"location": rating.location, "scale": rating.scale}


def _probs_table(
    ps: tuple[float, float, float],
) -> dict[str, TomlValue]:
    """Render a probability triple with named keys."""
    # Order follows the engine: win, draw, lose.
    p_win, p_draw, p_lose = ps
    return {"p_win": p_win, "p_draw": p_draw, "p_lose": p_lose}


def _resolve_pair(
    args: argparse.Namespace, cfg: SkillrConfig
) -> tuple[Rating, Rating]:
    """Fill omitted ratings with the configured prior."""
    p1 = args.p1 if args.p1 is not None else cfg.rating()
    p2 = args.p2 if args.p2 is not None else cfg.rating()
    return p1, p2


def _rate(args: argparse.Namespace, cfg: SkillrConfig) -> dict[str, TomlValue]:
    """Rate one match and return the result tables."""
    p1, p2 = _resolve_pair(args, cfg)
    outcome: Outcome = args.outcome
    new_p1, new_p2 = rate(p1, p2, outcome, cfg)
    return {
        "match": {
            "outcome": outcome.label,
            "outcome_code": int(outcome),
        },
        "prior": _probs_table(probs(p1, p2, cfg)),
        "p1": {"before": _rating_table(p1), "after": _rating_table(new_p1)},
        "p2": {"before": _rating_table(p2), "after": _rating_table(new_p2)},
    }


def _probs(
    args: argparse.Namespace, cfg: SkillrConfig
) -> dict[str, TomlValue]:
    """Score a pairing without updating anything."""
    p1, p2 = _resolve_pair(args, cfg)
    return {
        "p1": _rating_table(p1),
        "p2": _rating_table(p2),
        "probs": _probs_table(probs(p1, p2, cfg)),
    }


def _simulate(
    config: dict[str, TomlValue], cfg: SkillrConfig
) -> dict[str, TomlValue]:
    """Run the configured league and return per-player tables."""
    sim_cfg = _parse_simulate_config(config)
    result = simulate_league(
        sim_cfg.skills,
        cfg,
        sim_cfg.rounds,
        RngStream.from_seed(sim_cfg.seed),
    )
    players: dict[str, TomlValue] = {}
    for idx, (skill, rating, record) in enumerate(
        zip(sim_cfg.skills, result.ratings, result.records, strict=True)
    ):
        players[f"player_{idx:04d}"] = {
            "true_skill": skill,
            "location": rating.location,
            "scale": rating.scale,
            "wins": record.wins,
            "draws": record.draws,
            "losses": record.losses,
            "score": record.score(),
            "win_rate": record.win_rate(),
        }
    return {
        "simulate": {"seed": sim_cfg.seed, "rounds": sim_cfg.rounds},
        "players": players,
    }


def main(argv: list[str] | None = None) -> int:
    """Main entrypoint.

    Returns:
        Process exit code (0 for success).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _load_config(args.config)
    cfg = parse_skillr_config(_get_table_optional(config, "model"))

    if args.command == "rate":
        results = _rate(args, cfg)
    elif args.command == "probs":
        results = _probs(args, cfg)
    else:
        results = _simulate(config, cfg)

    data: dict[str, TomlValue] = {
        "run": _run_event(args.command),
        "model": skillr_config_to_toml(cfg),
        **results,
    }
    sys.stdout.write(dump_toml(data))
    return 0

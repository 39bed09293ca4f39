"""
TOML-only IO with strict typing.

Constraints:
- Reading: use tomllib
- Writing: a small deterministic serializer for the types we emit
- No Any / no untyped dicts
"""

from __future__ import annotations

import math
import tomllib
from pathlib import Path
from typing import TypeAlias, TypeGuard, cast

TomlScalar: TypeAlias = str | int | float | bool
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlRawValue: TypeAlias = (
    str | int | float | bool | list["TomlRawValue"] | dict[str, "TomlRawValue"]
)
TomlRawTable: TypeAlias = dict[str, TomlRawValue]


def load_toml(path: Path) -> dict[str, TomlValue]:
    """Load a TOML file into a strictly-typed nested dictionary.

    Raises:
        FileNotFoundError: If path does not exist.
        ValueError: If parsed content contains unsupported types.
    """
    return loads_toml(path.read_text(encoding="utf-8"))


def loads_toml(text: str) -> dict[str, TomlValue]:
    """Parse TOML text into a strictly-typed nested dictionary.

    Raises:
        ValueError: If the text is not valid TOML or holds unsupported types.
    """
    # tomllib.TOMLDecodeError is a ValueError subclass.
    data = cast(TomlRawTable, tomllib.loads(text))
    if not _is_str_key_dict(data):
        raise ValueError("TOML root must be a table with string keys.")
    return _validate_table(data)


def dump_toml(data: dict[str, TomlValue]) -> str:
    """Serialize a TOML dictionary with sorted keys, tables last.

    Raises:
        ValueError: If data contains unsupported types.
    """
    return _dumps_table(data, prefix="")


def _is_str_key_dict(value: TomlRawValue) -> TypeGuard[TomlRawTable]:
    """Check whether a value is a dict with string keys."""
    return isinstance(value, dict) and all(
        isinstance(key, str) for key in value
    )


def _validate_table(raw: TomlRawTable) -> dict[str, TomlValue]:
    """Recursively validate tables without leaking `object` to callers."""
    validated: dict[str, TomlValue] = {}
    for key, value in raw.items():
        if _is_str_key_dict(value):
            validated[key] = _validate_table(value)
        else:
            validated[key] = _validate_value(value)
    return validated


def _validate_value(value: TomlRawValue) -> TomlValue:
    """Validate a non-table TOML value.

    Raises:
        ValueError: If the value is an unsupported type.
    """
    if isinstance(value, str | int | float | bool):
        return value

    # Arrays of tables are not part of our config surface.
    if isinstance(value, list):
        items: list[TomlValue] = []
        for item in value:
            if isinstance(item, dict):
                raise ValueError("dict values in lists are not supported")
            items.append(_validate_value(item))
        return items

    raise ValueError(f"unsupported TOML value type: {type(value)}")


def _dumps_table(table: dict[str, TomlValue], prefix: str) -> str:
    """Dump one table, then its subtables under dotted headers."""
    scalars = {k: v for k, v in table.items() if not isinstance(v, dict)}
    subtables = {k: v for k, v in table.items() if isinstance(v, dict)}

    lines: list[str] = []
    if prefix:
        lines.append(f"[{prefix}]")
    for key in sorted(scalars):
        lines.append(f"{key} = {_format_value(scalars[key])}")

    for key in sorted(subtables):
        if lines:
            lines.append("")
        next_prefix = f"{prefix}.{key}" if prefix else key
        lines.append(_dumps_table(subtables[key], next_prefix).rstrip("\n"))

    return "\n".join(lines) + "\n"


def _format_value(value: TomlValue) -> str:
    """Format a TOML value as a literal.

    Raises:
        ValueError: If the value type is unsupported.
    """
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, int):
        return str(value)

    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return repr(value)

    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    if isinstance(value, list):
        rendered = ", ".join(_format_value(item) for item in value)
        return f"[{rendered}]"

    raise ValueError("unsupported TOML value type")

"""Parsing helpers for repeatable KEY=VALUE / Name: value options."""

from __future__ import annotations

import typer


def parse_pairs(values: list[str] | None, separator: str, option: str) -> dict[str, str]:
    """Split each value on the first separator into a key/value dict.

    Raises:
        typer.BadParameter: If a value has no separator or an empty key.
    """
    pairs: dict[str, str] = {}
    for raw in values or []:
        key, sep, value = raw.partition(separator)
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(
                f"expected 'KEY{separator}VALUE', got '{raw}'",
                param_hint=option,
            )
        pairs[key] = value.strip()
    return pairs

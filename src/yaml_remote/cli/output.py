"""Rich terminal output layer for load results.

Provides a headline table, decoded-value display, logging setup, and
JSON output for LoadResult values in terminal and CI.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from yaml_remote.models.result import LoadResult, LoadStatus, LoadSuccess, result_to_dict

# Status styling map: status value -> (symbol, Rich markup style)
_STATUS_STYLES: dict[str, tuple[str, str]] = {
    "success": ("\u2713 OK", "bold green"),
    "transport_error": ("! TRANSPORT ERROR", "bold bright_red"),
    "decode_error": ("\u2717 DECODE ERROR", "bold red"),
}

# Exit code mapping: status -> exit code
EXIT_CODES: dict[LoadStatus, int] = {
    LoadStatus.success: 0,
    LoadStatus.transport_error: 2,
    LoadStatus.decode_error: 3,
}


def configure_logging(level: str) -> None:
    """Send library logs to stderr through a RichHandler at level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def render_headline(result: LoadResult, url: str, console: Console) -> None:
    """Render a compact key-value table describing the result.

    Args:
        result: The LoadResult to describe.
        url: The requested URL.
        console: Rich Console for output.
    """
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")

    symbol, style = _STATUS_STYLES.get(result.kind.value, ("? UNKNOWN", "bold red"))
    table.add_row("Status", f"[{style}]{symbol}[/{style}]")
    table.add_row("URL", url)

    if isinstance(result, LoadSuccess) and isinstance(result.value, list):
        table.add_row("Items", str(len(result.value)))
    elif not result.ok:
        table.add_row("Retryable", "yes" if result.is_retryable else "no")

    console.print(table)


def render_value(value: Any, console: Console) -> None:
    """Pretty-print a decoded value as highlighted JSON."""
    console.print_json(data=value, default=str)


def output_json(result: LoadResult) -> None:
    """Write the result as JSON to stdout.

    Values that JSON cannot represent (objects built in trusted mode,
    dates) are written with their str() form.
    """
    sys.stdout.write(json.dumps(result_to_dict(result), indent=2, default=str))
    sys.stdout.write("\n")

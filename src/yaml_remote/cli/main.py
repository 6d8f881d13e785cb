"""yaml-remote CLI entry point."""

from typing import Optional

import typer

from yaml_remote import __version__
from yaml_remote.cli.fetch_cmd import fetch
from yaml_remote.cli.watch_cmd import watch

app = typer.Typer(
    name="yaml-remote",
    help="Fetch a remote YAML document and decode it",
    no_args_is_help=True,
)

# Register subcommands
app.command()(fetch)
app.command()(watch)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"yaml-remote {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Log requests and responses."),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING or ERROR (overrides yaml-remote.yaml)."
    ),
) -> None:
    """Fetch a remote YAML document and decode it."""
    ctx.obj = {"log_level": "DEBUG" if verbose else log_level}

"""yaml-remote watch CLI command.

Polls a remote YAML document and prints the decoded value each time it
changes. The first load goes through the automatic (debounced) path;
later polls call load() directly.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import typer
from rich.console import Console

from yaml_remote.cli.fetch_cmd import build_inputs, console, resolve_fetcher
from yaml_remote.cli.output import configure_logging, render_value
from yaml_remote.decoding.errors import ErrorFormatter
from yaml_remote.loader.remote import RemoteYamlLoader
from yaml_remote.models.config import load_project_config
from yaml_remote.models.request import DecodeOptions, RequestConfig
from yaml_remote.transport.base import BaseFetcher


def watch(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the YAML document"),
    interval: float = typer.Option(5.0, "--interval", min=0.0, help="Seconds between polls"),
    count: int = typer.Option(0, "-n", "--count", min=0, help="Stop after N polls (0 = forever)"),
    param: Optional[list[str]] = typer.Option(None, "-p", "--param", help="Query parameter KEY=VALUE (repeatable)"),
    header: Optional[list[str]] = typer.Option(None, "-H", "--header", help="Request header 'Name: value' (repeatable)"),
    timeout: Optional[int] = typer.Option(None, "--timeout", min=0, help="Timeout in milliseconds (0 = none)"),
    trusted: bool = typer.Option(False, "--trusted", help="Allow arbitrary YAML tags (trusted sources only)"),
    multi_document: bool = typer.Option(False, "--multi-document", help="Decode every document in the stream"),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise error output"),
    fetcher: Optional[str] = typer.Option(None, "--fetcher", help="Fetcher name or dotted path"),
) -> None:
    """Poll a remote YAML document and print it whenever it changes."""
    project = load_project_config()
    configure_logging((ctx.obj or {}).get("log_level") or project.log_level)

    request, options = build_inputs(
        project,
        url,
        params=param,
        headers=header,
        timeout_ms=timeout,
        trusted=trusted,
        multi_document=multi_document,
    )
    request = request.model_copy(update={"auto": True})
    fetcher_obj = resolve_fetcher(fetcher or project.fetcher)
    try:
        asyncio.run(
            _watch_async(
                request,
                options,
                fetcher_obj,
                interval=interval,
                count=count,
                ci=ci or project.ci_mode,
            )
        )
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


async def _watch_async(
    request: RequestConfig,
    options: DecodeOptions,
    fetcher: BaseFetcher,
    *,
    interval: float,
    count: int,
    ci: bool,
) -> None:
    """Async implementation of the watch command."""
    output_console = Console()
    formatter = ErrorFormatter(ci_mode=ci)
    changes = 0
    last_value: Any = None

    def on_parsed(value: Any) -> None:
        nonlocal changes, last_value
        if changes and value == last_value:
            return
        changes += 1
        last_value = value
        render_value(value, output_console)

    try:
        async with RemoteYamlLoader(fetcher=fetcher) as loader:
            loader.subscribe(on_parsed)
            loader.configure(request, options)

            polls = 0
            while True:
                result = await loader.wait_idle()
                polls += 1
                if result is not None and not result.ok:
                    typer.echo(
                        formatter.format_error(result, loader.state.last_response, request.url),
                        err=not ci,
                    )
                if count and polls >= count:
                    break
                await asyncio.sleep(interval)
                loader.load()
    finally:
        await fetcher.aclose()

    console.print(f"[dim]{polls} poll(s), {changes} change(s)[/dim]")

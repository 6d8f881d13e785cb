"""yaml-remote fetch CLI command.

Fetches one YAML document, decodes it, and prints the value or the
error. Exit codes: 0 success, 1 usage/setup error, 2 transport error,
3 decode error.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console

from yaml_remote.cli.options import parse_pairs
from yaml_remote.cli.output import (
    EXIT_CODES,
    configure_logging,
    output_json,
    render_headline,
    render_value,
)
from yaml_remote.decoding.errors import ErrorFormatter
from yaml_remote.loader.remote import RemoteYamlLoader
from yaml_remote.models.config import ProjectConfig, load_project_config
from yaml_remote.models.request import DecodeOptions, RequestConfig, TrustMode
from yaml_remote.models.result import LoadSuccess
from yaml_remote.transport.base import BaseFetcher
from yaml_remote.transport.registry import get_fetcher

console = Console(stderr=True)


def build_inputs(
    project: ProjectConfig,
    url: str,
    *,
    method: str | None = None,
    params: list[str] | None = None,
    headers: list[str] | None = None,
    body: str | None = None,
    content_type: str | None = None,
    with_credentials: bool = False,
    timeout_ms: int | None = None,
    trusted: bool = False,
    multi_document: bool = False,
) -> tuple[RequestConfig, DecodeOptions]:
    """Merge CLI options over project defaults."""
    request = project.build_request(
        url,
        method=method,
        params=parse_pairs(params, "=", "--param") or None,
        headers=parse_pairs(headers, ":", "--header") or None,
        body=body,
        content_type=content_type,
        with_credentials=True if with_credentials else None,
        timeout_ms=timeout_ms,
    )
    options = project.build_decode_options(
        trust=TrustMode.trusted if trusted else None,
        multi_document=True if multi_document else None,
    )
    return request, options


def resolve_fetcher(name: str) -> BaseFetcher:
    """Resolve a fetcher, turning registry errors into exit code 1."""
    try:
        return get_fetcher(name)
    except (ValueError, ImportError, TypeError) as exc:
        console.print(f"[bold red]Fetcher error:[/bold red] {exc}")
        raise typer.Exit(code=1)


def fetch(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the YAML document"),
    method: Optional[str] = typer.Option(None, "-X", "--method", help="HTTP method (default GET)"),
    param: Optional[list[str]] = typer.Option(None, "-p", "--param", help="Query parameter KEY=VALUE (repeatable)"),
    header: Optional[list[str]] = typer.Option(None, "-H", "--header", help="Request header 'Name: value' (repeatable)"),
    body: Optional[str] = typer.Option(None, "-d", "--body", help="Request body, sent unmodified"),
    content_type: Optional[str] = typer.Option(None, "--content-type", help="Content type of the body"),
    with_credentials: bool = typer.Option(False, "--with-credentials", help="Send stored cookies"),
    timeout: Optional[int] = typer.Option(None, "--timeout", min=0, help="Timeout in milliseconds (0 = none)"),
    trusted: bool = typer.Option(False, "--trusted", help="Allow arbitrary YAML tags (trusted sources only)"),
    multi_document: bool = typer.Option(False, "--multi-document", help="Decode every document in the stream"),
    format_json: bool = typer.Option(False, "--json", help="Output pure JSON to stdout"),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise error output"),
    fetcher: Optional[str] = typer.Option(None, "--fetcher", help="Fetcher name or dotted path"),
) -> None:
    """Fetch a remote YAML document and print its decoded value."""
    project = load_project_config()
    configure_logging((ctx.obj or {}).get("log_level") or project.log_level)

    request, options = build_inputs(
        project,
        url,
        method=method,
        params=param,
        headers=header,
        body=body,
        content_type=content_type,
        with_credentials=with_credentials,
        timeout_ms=timeout,
        trusted=trusted,
        multi_document=multi_document,
    )
    fetcher_obj = resolve_fetcher(fetcher or project.fetcher)
    asyncio.run(
        _fetch_async(
            request,
            options,
            fetcher_obj,
            format_json=format_json,
            ci=ci or project.ci_mode,
        )
    )


async def _fetch_async(
    request: RequestConfig,
    options: DecodeOptions,
    fetcher: BaseFetcher,
    *,
    format_json: bool,
    ci: bool,
) -> None:
    """Async implementation of the fetch command."""
    try:
        async with RemoteYamlLoader(request, options, fetcher=fetcher) as loader:
            result = await loader.load()
            source = loader.state.last_response
    finally:
        await fetcher.aclose()

    if format_json:
        output_json(result)
    elif isinstance(result, LoadSuccess):
        if not ci:
            render_headline(result, request.url, console)
        render_value(result.value, Console())
    else:
        formatter = ErrorFormatter(ci_mode=ci)
        typer.echo(formatter.format_error(result, source, request.url), err=not ci)

    exit_code = EXIT_CODES[result.kind]
    if exit_code:
        raise typer.Exit(code=exit_code)

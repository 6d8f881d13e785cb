"""httpx-backed fetcher.

Translates a RequestConfig into one httpx request: query params are
appended to the URL, the body is encoded according to its content
type, and the response body is returned as text. Network failures,
timeouts, and non-2xx statuses are raised as FetchError.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from yaml_remote.errors import FetchError
from yaml_remote.models.request import RequestConfig
from yaml_remote.transport.base import BaseFetcher, FetchResponse

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def _header_lookup(headers: dict[str, str], name: str) -> str | None:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def build_headers(config: RequestConfig) -> dict[str, str]:
    """Merge content_type into headers.

    An explicit Content-Type header wins over the content_type field.
    """
    headers = dict(config.headers)
    if config.content_type and _header_lookup(headers, "Content-Type") is None:
        headers["Content-Type"] = config.content_type
    return headers


def encode_body(body: Any, content_type: str | None) -> bytes | None:
    """Encode a request body for sending.

    Strings and bytes are sent unmodified. Mappings are encoded as
    `foo=bar+baz&x=1` for form content, and as JSON otherwise.
    """
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")

    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type == FORM_CONTENT_TYPE:
        return urlencode(body, doseq=True).encode("utf-8")
    return json.dumps(body).encode("utf-8")


class HttpxFetcher(BaseFetcher):
    """Fetcher using a lazily created httpx.AsyncClient.

    The client's cookie jar is only sent with requests whose
    with_credentials flag is set.

    Args:
        client: Client to use instead of creating one. A passed-in
            client is not closed by aclose().
        transport: Transport for the lazily created client (tests pass
            an httpx.MockTransport here).
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily initialize and return the AsyncClient."""
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport)
        return self._client

    async def fetch(self, config: RequestConfig) -> FetchResponse:
        client = self._get_client()
        headers = build_headers(config)
        timeout = config.timeout_ms / 1000 if config.timeout_ms > 0 else None

        try:
            request = client.build_request(
                config.method.upper(),
                config.url,
                params=config.params or None,
                headers=headers,
                content=encode_body(config.body, _header_lookup(headers, "Content-Type")),
                timeout=timeout,
            )
        except (httpx.InvalidURL, ValueError) as exc:
            raise FetchError(f"Invalid request: {exc}", url=config.url) from exc

        if not config.with_credentials:
            request.headers.pop("Cookie", None)

        logger.debug("HTTP request. method=%s url=%s", request.method, request.url)
        try:
            response = await self._send(client, request, config.with_credentials)
        except httpx.TimeoutException as exc:
            raise FetchError(
                f"Request timed out after {config.timeout_ms} ms", url=config.url
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                f"{type(exc).__name__}: {exc}", url=config.url
            ) from exc

        logger.debug(
            "HTTP response. url=%s status=%s bytes=%s",
            response.url,
            response.status_code,
            len(response.content),
        )
        if not response.is_success:
            raise FetchError(
                f"HTTP {response.status_code} {response.reason_phrase}".strip(),
                status_code=response.status_code,
                url=str(response.url),
            )

        return FetchResponse(
            text=response.text,
            status_code=response.status_code,
            url=str(response.url),
            headers=dict(response.headers),
        )

    async def _send(
        self, client: httpx.AsyncClient, request: httpx.Request, with_credentials: bool
    ) -> httpx.Response:
        """Send request, following redirects one hop at a time.

        httpx rebuilds every redirect request from the client cookie jar,
        so the Cookie header is stripped again on each hop when
        with_credentials is off.
        """
        response = await client.send(request, follow_redirects=False)
        hops = 0
        while response.next_request is not None:
            hops += 1
            if hops > client.max_redirects:
                await response.aclose()
                raise httpx.TooManyRedirects(
                    "Exceeded maximum allowed redirects.", request=response.next_request
                )
            next_request = response.next_request
            await response.aclose()
            if not with_credentials:
                next_request.headers.pop("Cookie", None)
            logger.debug("HTTP redirect. status=%s url=%s", response.status_code, next_request.url)
            response = await client.send(next_request, follow_redirects=False)
        return response

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def fetcher_name(self) -> str:
        return "httpx"

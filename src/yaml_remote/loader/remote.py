"""RemoteYamlLoader: fetch a YAML document over HTTP and decode it.

Ties a fetcher to a decoder. load() starts one request and returns an
asyncio.Task carrying the tagged LoadResult; the decoder only runs
after a successful fetch. With auto enabled, changes to url, params,
or body made through configure() schedule a debounced load().

All state is mutated on the event loop thread, so no locking is used.
Overlapping requests may complete out of order; each request carries
a sequence number, and a result older than the last applied one is
returned to its own awaiter but not published.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Callable
from typing import Any

from yaml_remote.decoding.yaml_decoder import BaseDecoder, PyYAMLDecoder
from yaml_remote.errors import FetchError, YAMLDecodeError
from yaml_remote.loader.debounce import Debouncer
from yaml_remote.models.request import DecodeOptions, RequestConfig
from yaml_remote.models.result import (
    DecodeError,
    LoadResult,
    LoadSuccess,
    TransportError,
)
from yaml_remote.models.state import LoaderState
from yaml_remote.transport.base import BaseFetcher
from yaml_remote.transport.httpx_fetcher import HttpxFetcher

logger = logging.getLogger(__name__)

ParsedCallback = Callable[[Any], object]


class RemoteYamlLoader:
    """Loads and decodes a remote YAML document.

    Args:
        config: Initial request parameters.
        options: Initial decode options.
        fetcher: Fetcher to use. Defaults to an HttpxFetcher owned (and
            closed) by this loader.
        decoder: Decoder to use. Defaults to PyYAMLDecoder.
        apply_out_of_order: If True, publish every result as it lands,
            even when a newer request already completed.
    """

    def __init__(
        self,
        config: RequestConfig | None = None,
        options: DecodeOptions | None = None,
        *,
        fetcher: BaseFetcher | None = None,
        decoder: BaseDecoder | None = None,
        apply_out_of_order: bool = False,
    ) -> None:
        self._config = config or RequestConfig()
        self._options = options or DecodeOptions()
        self._configured = False
        self._fetcher = fetcher or HttpxFetcher()
        self._owns_fetcher = fetcher is None
        self._decoder = decoder or PyYAMLDecoder()
        self._apply_out_of_order = apply_out_of_order
        self._state = LoaderState()
        self._sequence = 0
        self._tasks: set[asyncio.Task[LoadResult]] = set()
        self._listeners: list[ParsedCallback] = []
        self._debouncer = Debouncer(self._on_debounce_fired)

    # -- read-only views -------------------------------------------------

    @property
    def config(self) -> RequestConfig:
        return self._config

    @property
    def options(self) -> DecodeOptions:
        return self._options

    @property
    def state(self) -> LoaderState:
        """A copy of the current state."""
        return dataclasses.replace(self._state)

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def last_result(self) -> LoadResult | None:
        return self._state.last_result

    @property
    def active_request_count(self) -> int:
        return self._state.active_request_count

    @property
    def auto_load_pending(self) -> bool:
        return self._debouncer.pending

    # -- configuration ---------------------------------------------------

    def configure(
        self,
        config: RequestConfig | None = None,
        options: DecodeOptions | None = None,
    ) -> None:
        """Store new parameters, scheduling a load if auto is enabled.

        A load is scheduled only when auto is set, the URL is not empty,
        and url, params, or body differ from the previously configured
        values. Scheduling needs a running event loop.
        """
        if options is not None:
            self._options = options
        if config is None:
            return

        previous = self._config if self._configured else None
        self._config = config
        self._configured = True

        if not config.auto:
            if self._debouncer.cancel():
                logger.debug("Auto disabled; pending automatic load cancelled.")
            return

        changed = config.changed_trigger_fields(previous)
        if changed and config.url:
            logger.debug(
                "Scheduling automatic load. changed=%s debounce_ms=%s",
                ",".join(changed),
                config.debounce_ms,
            )
            self._debouncer.schedule(config.debounce_ms)

    def subscribe(self, callback: ParsedCallback) -> Callable[[], None]:
        """Register a listener for decoded values.

        The callback receives the decoded value once per published
        successful load. Returns a function that removes the listener.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    # -- requests --------------------------------------------------------

    def load(self) -> asyncio.Task[LoadResult]:
        """Start one request with the current config and decode options.

        Returns immediately; await the returned task for the result.
        Must be called from inside a running event loop; without one it
        raises RuntimeError and leaves the state untouched.
        """
        loop = asyncio.get_running_loop()
        self._sequence += 1
        sequence = self._sequence
        config = self._config
        options = self._options

        self._state.last_request = config
        self._state.active_request_count += 1
        self._state.loading = True
        logger.debug(
            "Request started. sequence=%s method=%s url=%s active=%s",
            sequence,
            config.method,
            config.url,
            self._state.active_request_count,
        )

        task = loop.create_task(
            self._run(sequence, config, options),
            name=f"yaml-remote-load-{sequence}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    generate_request = load

    def cancel(self) -> int:
        """Cancel the pending automatic load and all in-flight requests.

        Cancelled requests publish nothing; awaiting their task raises
        asyncio.CancelledError.

        Returns:
            Number of in-flight requests that were cancelled.
        """
        self._debouncer.cancel()
        in_flight = [task for task in self._tasks if not task.done()]
        for task in in_flight:
            task.cancel()
        if in_flight:
            logger.debug("Cancelled %s in-flight request(s).", len(in_flight))
        return len(in_flight)

    async def wait_idle(self) -> LoadResult | None:
        """Wait until no automatic load is pending and nothing is in flight.

        Returns:
            The last published result, or None if nothing was published.
        """
        while self._debouncer.pending or self._tasks:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            else:
                await asyncio.sleep(self._debouncer.remaining)
            # let done callbacks run before re-checking
            await asyncio.sleep(0)
        return self._state.last_result

    async def aclose(self) -> None:
        """Cancel outstanding work and close an owned fetcher."""
        self.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if self._owns_fetcher:
            await self._fetcher.aclose()

    async def __aenter__(self) -> RemoteYamlLoader:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- pipeline --------------------------------------------------------

    async def _run(
        self,
        sequence: int,
        config: RequestConfig,
        options: DecodeOptions,
    ) -> LoadResult:
        result, text = await self._fetch_and_decode(sequence, config, options)
        self._publish(result, text)
        return result

    async def _fetch_and_decode(
        self,
        sequence: int,
        config: RequestConfig,
        options: DecodeOptions,
    ) -> tuple[LoadResult, str | None]:
        try:
            response = await self._fetcher.fetch(config)
        except FetchError as exc:
            logger.warning(
                "Fetch failed. sequence=%s url=%s status=%s error=%s",
                sequence,
                config.url,
                exc.status_code,
                exc.message,
            )
            return (
                TransportError(
                    detail=exc.message,
                    status_code=exc.status_code,
                    url=exc.url or config.url,
                    sequence=sequence,
                ),
                None,
            )

        logger.debug(
            "Response received. sequence=%s status=%s chars=%s",
            sequence,
            response.status_code,
            len(response.text),
        )
        try:
            value = self._decoder.decode(
                response.text,
                options.trust,
                multi_document=options.multi_document,
                source_name=response.url or config.url,
            )
        except YAMLDecodeError as exc:
            logger.warning(
                "Decode failed. sequence=%s url=%s line=%s column=%s",
                sequence,
                config.url,
                exc.line,
                exc.column,
            )
            return (
                DecodeError(
                    detail=exc.message,
                    line=exc.line,
                    column=exc.column,
                    sequence=sequence,
                ),
                response.text,
            )

        return LoadSuccess(value=value, sequence=sequence), response.text

    def _publish(self, result: LoadResult, text: str | None) -> None:
        if (
            not self._apply_out_of_order
            and result.sequence < self._state.last_applied_sequence
        ):
            logger.debug(
                "Discarding stale result. sequence=%s last_applied=%s",
                result.sequence,
                self._state.last_applied_sequence,
            )
            return

        self._state.last_result = result
        self._state.last_applied_sequence = result.sequence
        if text is not None:
            self._state.last_response = text

        if isinstance(result, LoadSuccess):
            logger.debug("Parsed. sequence=%s listeners=%s", result.sequence, len(self._listeners))
            for callback in list(self._listeners):
                try:
                    callback(result.value)
                except Exception:
                    logger.exception("Parsed listener raised. callback=%r", callback)

    def _on_task_done(self, task: asyncio.Task[LoadResult]) -> None:
        self._tasks.discard(task)
        self._state.active_request_count -= 1
        self._state.loading = self._state.active_request_count > 0

        if task.cancelled():
            logger.debug("Request cancelled. task=%s", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Request failed unexpectedly. task=%s", task.get_name(), exc_info=exc)

    def _on_debounce_fired(self) -> None:
        self.load()

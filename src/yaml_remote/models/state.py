"""Observable state of a RemoteYamlLoader."""

from __future__ import annotations

from dataclasses import dataclass

from yaml_remote.models.request import RequestConfig
from yaml_remote.models.result import LoadResult


@dataclass
class LoaderState:
    """Snapshot of what the loader has requested and received.

    Attributes:
        last_request: Config used by the most recently started request.
        loading: True while at least one request is in flight.
        last_result: Result of the most recently applied request.
        last_response: Raw text of the most recently applied fetch.
        active_request_count: Number of requests in flight.
        last_applied_sequence: Sequence number of last_result, 0 if none.
    """

    last_request: RequestConfig | None = None
    loading: bool = False
    last_result: LoadResult | None = None
    last_response: str | None = None
    active_request_count: int = 0
    last_applied_sequence: int = 0

"""BaseFetcher ABC and the response dataclass.

All fetchers (the builtin httpx one, or custom ones resolved by dotted
path) subclass BaseFetcher and implement fetch(). A fetcher performs a
single HTTP exchange; it never decodes, caches, or retries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from yaml_remote.models.request import RequestConfig


@dataclass
class FetchResponse:
    """Successful result of a single fetch() call."""

    text: str
    status_code: int = 200
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)


class BaseFetcher(ABC):
    """Abstract base class for all fetchers.

    fetch() is a coroutine so that a pending request can be cancelled by
    cancelling the task awaiting it.
    """

    @abstractmethod
    async def fetch(self, config: RequestConfig) -> FetchResponse:
        """Perform the HTTP exchange described by config.

        Args:
            config: Request parameters.

        Returns:
            FetchResponse holding the body as text.

        Raises:
            FetchError: On network failure, timeout, or non-2xx status.
        """
        ...

    async def aclose(self) -> None:
        """Release transport resources. Default implementation does nothing."""

    def fetcher_name(self) -> str:
        """Return the name of this fetcher for logs and output."""
        return type(self).__name__

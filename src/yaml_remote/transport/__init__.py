"""yaml-remote transport - fetcher abstraction layer.

Re-exports the BaseFetcher ABC, the response dataclass, the builtin
httpx fetcher, and the fetcher registry function.
"""

from yaml_remote.transport.base import BaseFetcher, FetchResponse
from yaml_remote.transport.httpx_fetcher import HttpxFetcher
from yaml_remote.transport.registry import get_fetcher

__all__ = [
    "BaseFetcher",
    "FetchResponse",
    "HttpxFetcher",
    "get_fetcher",
]

"""Tagged load results produced once per request.

These are plain dataclasses (not Pydantic): the decoded value can be
any object the decoder constructs, including arbitrary Python objects
in trusted mode, which Pydantic would have to be told to skip.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal, Union


class LoadStatus(str, Enum):
    """Tag distinguishing the three load outcomes."""

    success = "success"
    transport_error = "transport_error"
    decode_error = "decode_error"


@dataclass
class LoadSuccess:
    """The fetch succeeded and the response decoded.

    value is a single document, or a list of documents in stream order
    when the request was decoded in multi-document mode.
    """

    value: Any
    sequence: int = 0
    kind: Literal[LoadStatus.success] = field(default=LoadStatus.success, init=False)

    @property
    def ok(self) -> bool:
        return True

    @property
    def is_retryable(self) -> bool:
        return False


@dataclass
class TransportError:
    """The HTTP exchange failed; the decoder was not invoked.

    Retrying the same request may succeed.
    """

    detail: str
    status_code: int | None = None
    url: str | None = None
    sequence: int = 0
    kind: Literal[LoadStatus.transport_error] = field(
        default=LoadStatus.transport_error, init=False
    )

    @property
    def ok(self) -> bool:
        return False

    @property
    def is_retryable(self) -> bool:
        return True


@dataclass
class DecodeError:
    """The response arrived but could not be decoded.

    Retrying cannot succeed without changing the remote document or
    the trust mode.
    """

    detail: str
    line: int | None = None
    column: int | None = None
    sequence: int = 0
    kind: Literal[LoadStatus.decode_error] = field(
        default=LoadStatus.decode_error, init=False
    )

    @property
    def ok(self) -> bool:
        return False

    @property
    def is_retryable(self) -> bool:
        return False


LoadResult = Union[LoadSuccess, TransportError, DecodeError]


def result_to_dict(result: LoadResult) -> dict[str, Any]:
    """Convert a LoadResult to a JSON-friendly dict with a string kind."""
    data = asdict(result)
    data["kind"] = result.kind.value
    return data

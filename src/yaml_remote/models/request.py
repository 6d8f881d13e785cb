"""Request parameters and decode options owned by a RemoteYamlLoader.

Both models are frozen: a host changes parameters by building a new
instance (usually with model_copy(update=...)) and passing it to
RemoteYamlLoader.configure().
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# Fields whose change schedules an automatic request when auto is enabled
AUTO_TRIGGER_FIELDS: tuple[str, ...] = ("url", "params", "body")


class TrustMode(str, Enum):
    """How much the YAML decoder is allowed to construct.

    safe restricts decoding to plain scalars and collections. trusted
    allows arbitrary language-specific tags and must only be used with
    sources the host controls.
    """

    safe = "safe"
    trusted = "trusted"


class RequestConfig(BaseModel):
    """Parameters of the HTTP request that fetches the YAML document."""

    model_config = {"extra": "forbid", "frozen": True}

    url: str = ""
    method: str = "GET"
    params: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    content_type: str | None = None
    body: str | bytes | dict[str, Any] | None = None
    with_credentials: bool = False
    timeout_ms: int = Field(default=0, ge=0)
    auto: bool = False
    debounce_ms: int = Field(default=0, ge=0)

    def changed_trigger_fields(self, previous: RequestConfig | None) -> list[str]:
        """Return the auto-trigger fields that differ from previous.

        With no previous config, every trigger field holding a non-empty
        value counts as changed.
        """
        if previous is None:
            return [name for name in AUTO_TRIGGER_FIELDS if getattr(self, name)]
        return [
            name
            for name in AUTO_TRIGGER_FIELDS
            if getattr(self, name) != getattr(previous, name)
        ]


class DecodeOptions(BaseModel):
    """Options handed to the decoder with every response text."""

    model_config = {"extra": "forbid", "frozen": True}

    trust: TrustMode = TrustMode.safe
    multi_document: bool = False

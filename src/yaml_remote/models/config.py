"""Project configuration model for yaml-remote.

Captures yaml-remote.yaml fields with sensible defaults for request
parameters, decode options, and output settings. CLI options take
precedence over values read from the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from yaml_remote.models.request import DecodeOptions, RequestConfig, TrustMode

CONFIG_FILENAME = "yaml-remote.yaml"


class RequestDefaults(BaseModel):
    """Default request parameters applied to every fetch."""

    model_config = {"extra": "forbid"}

    method: str = "GET"
    headers: dict[str, str] = Field(default_factory=dict)
    content_type: str | None = None
    with_credentials: bool = False
    timeout_ms: int = Field(default=0, ge=0)
    debounce_ms: int = Field(default=0, ge=0)


class DecodeDefaults(BaseModel):
    """Default decode options."""

    model_config = {"extra": "forbid"}

    trust: TrustMode = TrustMode.safe
    multi_document: bool = False


class ProjectConfig(BaseModel):
    """Project-level configuration loaded from yaml-remote.yaml."""

    model_config = {"extra": "forbid"}

    fetcher: str = "httpx"
    ci_mode: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    defaults: RequestDefaults = Field(default_factory=RequestDefaults)
    decode: DecodeDefaults = Field(default_factory=DecodeDefaults)

    def build_request(self, url: str, **overrides: object) -> RequestConfig:
        """Build a RequestConfig for url from the defaults plus overrides.

        Headers from overrides are merged over the default headers.
        Overrides whose value is None are ignored.
        """
        values: dict[str, object] = self.defaults.model_dump()
        values["url"] = url
        extra_headers = overrides.pop("headers", None)
        values.update({k: v for k, v in overrides.items() if v is not None})
        if extra_headers:
            values["headers"] = {**self.defaults.headers, **extra_headers}
        return RequestConfig.model_validate(values)

    def build_decode_options(
        self,
        trust: TrustMode | None = None,
        multi_document: bool | None = None,
    ) -> DecodeOptions:
        return DecodeOptions(
            trust=trust if trust is not None else self.decode.trust,
            multi_document=(
                multi_document if multi_document is not None else self.decode.multi_document
            ),
        )


def find_project_root(start: Path | None = None) -> Path:
    """Return the nearest directory at or above start holding yaml-remote.yaml.

    The CLI calls this with no argument, so a fetch run anywhere inside
    a project picks up that project's request defaults. When no
    directory up to the filesystem root has the file, the cwd is used
    and every setting keeps its built-in default.
    """
    here = (start or Path.cwd()).resolve()
    if here.is_file():
        here = here.parent
    for candidate in (here, *here.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return Path.cwd()


def load_project_config(project_root: Path | None = None) -> ProjectConfig:
    """Read request and decode defaults from yaml-remote.yaml.

    The file itself is always read with yaml.safe_load, whatever trust
    mode it configures for fetched documents. A missing or empty file
    yields ProjectConfig(); unknown keys fail validation.
    """
    config_path = (project_root or find_project_root()) / CONFIG_FILENAME
    if not config_path.is_file():
        return ProjectConfig()

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return ProjectConfig()
    return ProjectConfig.model_validate(raw)

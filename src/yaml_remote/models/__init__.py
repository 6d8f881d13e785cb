"""yaml-remote data models - re-exports all public model classes."""

from yaml_remote.models.config import ProjectConfig, load_project_config
from yaml_remote.models.request import DecodeOptions, RequestConfig, TrustMode
from yaml_remote.models.result import (
    DecodeError,
    LoadResult,
    LoadStatus,
    LoadSuccess,
    TransportError,
)
from yaml_remote.models.state import LoaderState

__all__ = [
    "DecodeError",
    "DecodeOptions",
    "LoadResult",
    "LoadStatus",
    "LoadSuccess",
    "LoaderState",
    "ProjectConfig",
    "RequestConfig",
    "TransportError",
    "TrustMode",
    "load_project_config",
]

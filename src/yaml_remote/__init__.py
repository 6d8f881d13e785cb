"""yaml-remote: fetch a YAML document over HTTP and decode it."""

from yaml_remote.errors import FetchError, YAMLDecodeError, YamlRemoteError
from yaml_remote.loader.remote import RemoteYamlLoader
from yaml_remote.models.request import DecodeOptions, RequestConfig, TrustMode
from yaml_remote.models.result import (
    DecodeError,
    LoadResult,
    LoadStatus,
    LoadSuccess,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "DecodeOptions",
    "FetchError",
    "LoadResult",
    "LoadStatus",
    "LoadSuccess",
    "RemoteYamlLoader",
    "RequestConfig",
    "TransportError",
    "TrustMode",
    "YAMLDecodeError",
    "YamlRemoteError",
    "__version__",
]

"""YAML decoding and error reporting."""

from yaml_remote.decoding.errors import ErrorFormatter
from yaml_remote.decoding.yaml_decoder import BaseDecoder, PyYAMLDecoder

__all__ = [
    "BaseDecoder",
    "ErrorFormatter",
    "PyYAMLDecoder",
]

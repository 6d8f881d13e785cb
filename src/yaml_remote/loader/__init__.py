"""Remote YAML loading - fetch, decode, publish."""

from yaml_remote.loader.debounce import Debouncer
from yaml_remote.loader.remote import RemoteYamlLoader

__all__ = [
    "Debouncer",
    "RemoteYamlLoader",
]

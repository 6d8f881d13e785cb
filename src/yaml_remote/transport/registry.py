"""Resolve the `fetcher` setting to a BaseFetcher instance.

The setting (from yaml-remote.yaml or --fetcher) is either "httpx" or
the import path of a BaseFetcher subclass, e.g. "corp_http.SignedFetcher"
for hosts that need their own signing or proxy handling. The class is
instantiated with no arguments.
"""

from __future__ import annotations

import importlib

from yaml_remote.transport.base import BaseFetcher

BUILTIN_FETCHERS: dict[str, str] = {
    "httpx": "yaml_remote.transport.httpx_fetcher.HttpxFetcher",
}


def get_fetcher(name: str) -> BaseFetcher:
    """Build the fetcher named by name.

    Raises:
        ValueError: name is neither builtin nor an import path.
        ImportError: the module or the class does not exist.
        TypeError: the class does not subclass BaseFetcher.
    """
    dotted_path = BUILTIN_FETCHERS.get(name, name)
    module_path, _, class_name = dotted_path.rpartition(".")
    if not module_path or not class_name:
        raise ValueError(
            f"Unknown fetcher '{name}'. Use 'httpx' or the import path of a "
            f"BaseFetcher subclass, such as 'corp_http.SignedFetcher'."
        )

    module = importlib.import_module(module_path)
    cls = getattr(module, class_name, None)
    if cls is None:
        raise ImportError(f"Module '{module_path}' has no attribute '{class_name}'.")

    if not isinstance(cls, type) or not issubclass(cls, BaseFetcher):
        raise TypeError(
            f"Fetcher '{dotted_path}' is not a subclass of BaseFetcher; "
            f"it cannot serve requests for the loader."
        )
    return cls()

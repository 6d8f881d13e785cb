"""Tests for the fetcher registry (get_fetcher function)."""

from __future__ import annotations

import types
from unittest.mock import patch

import pytest

from yaml_remote.transport.base import BaseFetcher, FetchResponse
from yaml_remote.transport.httpx_fetcher import HttpxFetcher
from yaml_remote.transport.registry import BUILTIN_FETCHERS, get_fetcher


# --- Test fetcher for dotted-path tests ---


class _TestFetcher(BaseFetcher):
    """A valid test fetcher for dotted-path loading tests."""

    async def fetch(self, config):
        return FetchResponse(text="a: 1\n", url=config.url)


class _NotAFetcher:
    """Not a BaseFetcher subclass -- used to test type validation."""

    pass


class TestGetFetcherBuiltin:
    """Test builtin fetcher name resolution."""

    def test_httpx_builtin(self) -> None:
        assert isinstance(get_fetcher("httpx"), HttpxFetcher)

    def test_builtin_names(self) -> None:
        assert sorted(BUILTIN_FETCHERS) == ["httpx"]

    def test_unknown_name_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown fetcher 'curl'"):
            get_fetcher("curl")


class TestGetFetcherDottedPath:
    """Test custom fetchers resolved by dotted path."""

    def _fake_module(self) -> types.ModuleType:
        module = types.ModuleType("fake_fetchers")
        module._TestFetcher = _TestFetcher  # type: ignore[attr-defined]
        module._NotAFetcher = _NotAFetcher  # type: ignore[attr-defined]
        return module

    def test_dotted_path_instantiates_class(self) -> None:
        with patch("importlib.import_module", return_value=self._fake_module()):
            fetcher = get_fetcher("fake_fetchers._TestFetcher")
        assert isinstance(fetcher, _TestFetcher)
        assert fetcher.fetcher_name() == "_TestFetcher"

    def test_missing_class_raises_import_error(self) -> None:
        with patch("importlib.import_module", return_value=self._fake_module()):
            with pytest.raises(ImportError, match="has no attribute 'Missing'"):
                get_fetcher("fake_fetchers.Missing")

    def test_non_fetcher_class_raises_type_error(self) -> None:
        with patch("importlib.import_module", return_value=self._fake_module()):
            with pytest.raises(TypeError, match="not a subclass of BaseFetcher"):
                get_fetcher("fake_fetchers._NotAFetcher")

    def test_missing_module_raises_import_error(self) -> None:
        with pytest.raises(ImportError):
            get_fetcher("no_such_package_xyz.Fetcher")

"""Tests for RequestConfig and DecodeOptions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from yaml_remote.models.request import DecodeOptions, RequestConfig, TrustMode


class TestRequestConfig:
    """Test RequestConfig defaults and validation."""

    def test_defaults(self):
        """RequestConfig mirrors the documented defaults."""
        config = RequestConfig()
        assert config.url == ""
        assert config.method == "GET"
        assert config.params == {}
        assert config.headers == {}
        assert config.content_type is None
        assert config.body is None
        assert config.with_credentials is False
        assert config.timeout_ms == 0
        assert config.auto is False
        assert config.debounce_ms == 0

    def test_rejects_negative_timeout(self):
        """timeout_ms must be >= 0."""
        with pytest.raises(ValidationError):
            RequestConfig(timeout_ms=-1)

    def test_rejects_negative_debounce(self):
        """debounce_ms must be >= 0."""
        with pytest.raises(ValidationError):
            RequestConfig(debounce_ms=-5)

    def test_is_frozen(self):
        """Configs are immutable; changes go through model_copy."""
        config = RequestConfig(url="https://example.com/a.yaml")
        with pytest.raises(ValidationError):
            config.url = "https://example.com/b.yaml"

    def test_body_accepts_mapping_and_bytes(self):
        """Body may be text, bytes, or a mapping."""
        assert RequestConfig(body={"x": 1}).body == {"x": 1}
        assert RequestConfig(body=b"\x00\x01").body == b"\x00\x01"


class TestChangedTriggerFields:
    """Test detection of changes that schedule automatic loads."""

    def test_first_config_counts_non_empty_fields(self):
        """Without a previous config, non-empty trigger fields count as changed."""
        config = RequestConfig(url="https://example.com/a.yaml")
        assert config.changed_trigger_fields(None) == ["url"]

    def test_first_empty_config_has_no_changes(self):
        """An empty first config changes nothing."""
        assert RequestConfig().changed_trigger_fields(None) == []

    def test_url_params_body_detected(self):
        """Changes to url, params, and body are all reported."""
        before = RequestConfig(url="https://example.com/a.yaml")
        after = before.model_copy(
            update={"url": "https://example.com/b.yaml", "params": {"v": "2"}, "body": "x"}
        )
        assert after.changed_trigger_fields(before) == ["url", "params", "body"]

    def test_other_fields_ignored(self):
        """Headers, method, and timeout are not trigger fields."""
        before = RequestConfig(url="https://example.com/a.yaml")
        after = before.model_copy(
            update={"headers": {"X-A": "1"}, "method": "POST", "timeout_ms": 50}
        )
        assert after.changed_trigger_fields(before) == []


class TestDecodeOptions:
    """Test DecodeOptions."""

    def test_defaults_to_safe_single_document(self):
        options = DecodeOptions()
        assert options.trust is TrustMode.safe
        assert options.multi_document is False

    def test_trust_from_string(self):
        """Trust mode validates from its string value."""
        assert DecodeOptions.model_validate({"trust": "trusted"}).trust is TrustMode.trusted

    def test_rejects_unknown_trust(self):
        with pytest.raises(ValidationError):
            DecodeOptions.model_validate({"trust": "unsafe"})

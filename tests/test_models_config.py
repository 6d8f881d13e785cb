"""Tests for yaml_remote.models.config - ProjectConfig, find_project_root, load_project_config."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestProjectConfig:
    """Test ProjectConfig model."""

    def test_defaults(self):
        """ProjectConfig has sensible defaults."""
        from yaml_remote.models import ProjectConfig

        config = ProjectConfig()
        assert config.fetcher == "httpx"
        assert config.ci_mode is False
        assert config.log_level == "WARNING"
        assert config.defaults.method == "GET"
        assert config.defaults.timeout_ms == 0
        assert config.decode.trust.value == "safe"
        assert config.decode.multi_document is False

    def test_rejects_unknown_keys(self):
        """ProjectConfig rejects unknown keys."""
        from yaml_remote.models import ProjectConfig

        with pytest.raises(ValidationError, match="extra_forbidden"):
            ProjectConfig.model_validate({"unknown_field": True})

    def test_rejects_unknown_log_level(self):
        from yaml_remote.models import ProjectConfig

        with pytest.raises(ValidationError):
            ProjectConfig.model_validate({"log_level": "LOUD"})


class TestBuildRequest:
    """Test merging defaults with per-call overrides."""

    def test_uses_defaults(self):
        """build_request copies default parameters."""
        from yaml_remote.models import ProjectConfig

        project = ProjectConfig.model_validate(
            {"defaults": {"timeout_ms": 2500, "headers": {"Accept": "application/yaml"}}}
        )
        request = project.build_request("https://example.com/a.yaml")
        assert request.url == "https://example.com/a.yaml"
        assert request.timeout_ms == 2500
        assert request.headers == {"Accept": "application/yaml"}

    def test_overrides_win_and_headers_merge(self):
        """Overrides replace defaults; headers merge over default headers."""
        from yaml_remote.models import ProjectConfig

        project = ProjectConfig.model_validate(
            {"defaults": {"method": "GET", "headers": {"Accept": "application/yaml"}}}
        )
        request = project.build_request(
            "https://example.com/a.yaml",
            method="POST",
            headers={"X-Token": "abc"},
            timeout_ms=None,
        )
        assert request.method == "POST"
        assert request.headers == {"Accept": "application/yaml", "X-Token": "abc"}
        assert request.timeout_ms == 0

    def test_build_decode_options(self):
        """Decode options fall back to the decode section."""
        from yaml_remote.models import ProjectConfig, TrustMode

        project = ProjectConfig.model_validate({"decode": {"multi_document": True}})
        options = project.build_decode_options()
        assert options.multi_document is True
        assert options.trust is TrustMode.safe

        options = project.build_decode_options(trust=TrustMode.trusted, multi_document=False)
        assert options.trust is TrustMode.trusted
        assert options.multi_document is False


class TestFindProjectRoot:
    """Test find_project_root function."""

    def test_finds_config_in_current_dir(self, tmp_path: Path):
        """find_project_root returns dir containing yaml-remote.yaml."""
        from yaml_remote.models.config import find_project_root

        (tmp_path / "yaml-remote.yaml").write_text("ci_mode: true\n")
        assert find_project_root(tmp_path) == tmp_path.resolve()

    def test_walks_up_from_nested_dir(self, tmp_path: Path):
        """find_project_root walks up from a nested directory."""
        from yaml_remote.models.config import find_project_root

        (tmp_path / "yaml-remote.yaml").write_text("ci_mode: true\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == tmp_path.resolve()

    def test_returns_cwd_when_not_found(self, tmp_path: Path, monkeypatch):
        """find_project_root returns cwd when no config exists."""
        from yaml_remote.models.config import find_project_root

        monkeypatch.chdir(tmp_path)
        nested = tmp_path / "x"
        nested.mkdir()
        assert find_project_root(nested) == Path.cwd()


class TestLoadProjectConfig:
    """Test load_project_config function."""

    def test_returns_defaults_without_file(self, tmp_path: Path):
        from yaml_remote.models.config import ProjectConfig, load_project_config

        assert load_project_config(tmp_path) == ProjectConfig()

    def test_returns_defaults_for_empty_file(self, tmp_path: Path):
        from yaml_remote.models.config import ProjectConfig, load_project_config

        (tmp_path / "yaml-remote.yaml").write_text("# nothing yet\n")
        assert load_project_config(tmp_path) == ProjectConfig()

    def test_loads_values(self, tmp_path: Path):
        from yaml_remote.models.config import load_project_config

        (tmp_path / "yaml-remote.yaml").write_text(
            "ci_mode: true\n"
            "defaults:\n"
            "  timeout_ms: 1000\n"
            "decode:\n"
            "  trust: trusted\n"
        )
        config = load_project_config(tmp_path)
        assert config.ci_mode is True
        assert config.defaults.timeout_ms == 1000
        assert config.decode.trust.value == "trusted"

    def test_unknown_key_in_file_fails_validation(self, tmp_path: Path):
        from yaml_remote.models.config import load_project_config

        (tmp_path / "yaml-remote.yaml").write_text("retries: 3\n")
        with pytest.raises(ValidationError):
            load_project_config(tmp_path)

    def test_found_from_nested_dir(self, tmp_path: Path, monkeypatch):
        """Without a root argument the file is found by walking up from cwd."""
        from yaml_remote.models.config import load_project_config

        (tmp_path / "yaml-remote.yaml").write_text("fetcher: my.module.Fetcher\n")
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        assert load_project_config().fetcher == "my.module.Fetcher"

"""Tests for tagtrain.core.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from tagtrain.core.config import (
    Config,
    ManifestConfig,
    ReleaseSettings,
    load_config,
    load_config_or_default,
)
from tagtrain.core.result import Err, Ok


class TestDefaults:
    def test_release_settings(self) -> None:
        settings = ReleaseSettings()
        assert settings.prerelease_label == "alpha"
        assert settings.tag_sort == "creatordate"

    def test_manifest(self) -> None:
        manifest = ManifestConfig()
        assert manifest.path == "Cargo.toml"
        assert manifest.marker == "# crate version"

    def test_config(self) -> None:
        config = Config()
        assert config.publish.token_env == "CARGO_TOKEN"
        assert config.changelog.config == "cliff.toml"
        assert config.host.repo is None

    def test_frozen(self) -> None:
        settings = ReleaseSettings()
        with pytest.raises(AttributeError):
            settings.prerelease_label = "beta"  # type: ignore[misc]


class TestFromDict:
    def test_empty(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_full(self) -> None:
        config = Config.from_dict(
            {
                "release": {"prerelease_label": "nightly", "tag_sort": "committerdate"},
                "manifest": {"path": "crates/core/Cargo.toml", "marker": "# release"},
                "publish": {"token_env": "CRATES_IO_TOKEN"},
                "changelog": {"config": ".github/cliff.toml"},
                "host": {"repo": "ratatui/ratatui"},
            }
        )
        assert config.release == ReleaseSettings("nightly", "committerdate")
        assert config.manifest == ManifestConfig("crates/core/Cargo.toml", "# release")
        assert config.publish.token_env == "CRATES_IO_TOKEN"
        assert config.changelog.config == ".github/cliff.toml"
        assert config.host.repo == "ratatui/ratatui"

    def test_blank_values_fall_back(self) -> None:
        config = Config.from_dict({"manifest": {"path": "  "}})
        assert config.manifest.path == "Cargo.toml"

    def test_rejects_bad_label(self) -> None:
        with pytest.raises(ValueError, match="prerelease_label"):
            Config.from_dict({"release": {"prerelease_label": "al.pha"}})

    def test_rejects_bad_sort(self) -> None:
        with pytest.raises(ValueError, match="tag_sort"):
            Config.from_dict({"release": {"tag_sort": "version:refname"}})


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".tagtrain.toml"
        path.write_text('[release]\nprerelease_label = "beta"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.release.prerelease_label == "beta"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / ".tagtrain.toml"
        path.write_text("[release\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / ".tagtrain.toml"
        path.write_text('[release]\ntag_sort = "random"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_or_default_without_file(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / ".tagtrain.toml") == Ok(Config())

    def test_or_default_still_reports_broken_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".tagtrain.toml"
        path.write_text("not toml at all [", encoding="utf-8")
        assert isinstance(load_config_or_default(path), Err)

    def test_directory_is_unreadable_config(self, tmp_path: Path) -> None:
        path = tmp_path / "conf.d"
        path.mkdir()

        result = load_config_or_default(path)

        assert isinstance(result, Err)
        assert "Cannot read config" in result.error.message
        assert result.error.path == path

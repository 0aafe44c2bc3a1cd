"""Tests for configuration loading."""

import os
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from gh_triage.config import (
    DEFAULT_ENDPOINT,
    LabelRules,
    RepositoryRef,
    TriageConfig,
    get_github_token,
    load_config,
)


class TestRepositoryRef:
    """Test owner/name parsing."""

    def test_parse(self) -> None:
        ref = RepositoryRef.parse(" dotnet/maui ")

        assert ref == RepositoryRef(owner="dotnet", name="maui")
        assert str(ref) == "dotnet/maui"

    @pytest.mark.parametrize("value", ["maui", "/maui", "dotnet/", "a/b/c"])
    def test_parse_invalid(self, value: str) -> None:
        with pytest.raises(ValueError, match="Expected format: owner/name"):
            RepositoryRef.parse(value)


class TestLabelRules:
    """Test label conventions."""

    def test_defaults(self) -> None:
        rules = LabelRules()

        assert rules.is_area_label("area/xaml")
        assert not rules.is_area_label("t/bug")
        assert rules.is_bug_label("t/bug")
        assert not rules.is_bug_label("t/bug-ish")


class TestLoadConfig:
    """Test load_config."""

    def test_defaults_without_file(self) -> None:
        config = load_config(None)

        assert config.repositories == []
        assert config.endpoint == DEFAULT_ENDPOINT
        assert config.page_size == 100
        assert config.retry_delay_seconds == 5.0
        assert config.max_retries == 25
        assert config.report.start_date == date(2021, 6, 1)
        assert config.milestones.future_names == [".NET 7", "Future"]

    def test_yaml_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "triage.yaml"
        config_file.write_text(
            "repositories:\n"
            "  - dotnet/maui\n"
            "  - owner: xamarin\n"
            "    name: Xamarin.Forms\n"
            "retry_delay_seconds: 1\n"
            "labels:\n"
            "  area_prefix: 'area-'\n"
            "  bug_label: bug\n"
            "milestones:\n"
            "  target_prefix: '7.0'\n"
            "report:\n"
            "  start_date: 2022-01-03\n"
            "  category_labels: [bug, enhancement]\n",
            encoding="utf-8",
        )

        config = load_config(config_file)

        assert [str(r) for r in config.repositories] == [
            "dotnet/maui",
            "xamarin/Xamarin.Forms",
        ]
        assert config.retry_delay_seconds == 1.0
        assert config.labels.area_prefix == "area-"
        assert config.labels.bug_label == "bug"
        assert config.milestones.target_prefix == "7.0"
        assert config.milestones.target_exclude == ["servicing"]
        assert config.report.start_date == date(2022, 1, 3)
        assert config.report.category_labels == ["bug", "enhancement"]

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding="utf-8")

        assert load_config(config_file) == TriageConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Configuration file not found"):
            load_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- dotnet/maui\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(config_file)

    @pytest.mark.parametrize(
        "content",
        ["page_size: 500\n", "max_retries: 0\n", "repositories: ['maui']\n"],
    )
    def test_invalid_values(self, tmp_path: Path, content: str) -> None:
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(content, encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(config_file)


class TestGetGithubToken:
    """Test token resolution."""

    def test_explicit_token_wins(self) -> None:
        with patch.dict(os.environ, {"GITHUB_TOKEN": "env"}):
            assert get_github_token("explicit") == "explicit"

    def test_env_token(self) -> None:
        with patch.dict(os.environ, {"GITHUB_TOKEN": "env"}):
            assert get_github_token() == "env"

    def test_missing_token(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="GitHub token is required"):
                get_github_token()

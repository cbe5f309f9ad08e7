"""Tests for configuration loading."""

from pathlib import Path

import pytest

from hn_classifier.config import DEFAULT_DATABASE_URL, get_settings


def test_defaults_without_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test defaults apply when no YAML file exists."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = get_settings(tmp_path / "missing.yaml")

    assert settings.openai_api_key == "sk-test"
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.openai.model == "gpt-5-mini"
    assert list(settings.compare.models) == ["nano", "mini", "gpt5"]
    assert settings.reference_label == "gpt5"
    assert settings.compare.default_limit == 10


def test_yaml_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test YAML sections override dataclass defaults."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql://other/db")
    config = tmp_path / "config.yaml"
    config.write_text(
        "openai:\n"
        "  model: gpt-5-nano\n"
        "compare:\n"
        "  default_limit: 3\n"
        "  models:\n"
        "    small: gpt-5-nano\n"
        "    large: gpt-5\n"
        "prompts:\n"
        "  classify_v2: 'Rate {title} / {first_comment}'\n",
        encoding="utf-8",
    )

    settings = get_settings(config)

    assert settings.openai_api_key == ""
    assert settings.database_url == "postgresql://other/db"
    assert settings.openai.model == "gpt-5-nano"
    assert settings.compare.default_limit == 3
    assert settings.reference_label == "large"
    assert settings.prompts.classify_v2 == "Rate {title} / {first_comment}"


def test_unknown_key_rejected(tmp_path: Path) -> None:
    """Test typos in the YAML file are reported."""
    config = tmp_path / "config.yaml"
    config.write_text("openai:\n  modle: gpt-5\n", encoding="utf-8")

    with pytest.raises(ValueError, match="openai.modle"):
        get_settings(config)


def test_empty_models_rejected(tmp_path: Path) -> None:
    """Test at least one replay model is required."""
    config = tmp_path / "config.yaml"
    config.write_text("compare:\n  models: {}\n", encoding="utf-8")

    with pytest.raises(ValueError, match="compare.models"):
        get_settings(config)

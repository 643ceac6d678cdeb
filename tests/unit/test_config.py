"""Unit tests for config.py"""

import pytest

from docshift.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is read."""
    monkeypatch.chdir(tmp_path)


def test_load_config_uses_env_output_dir(monkeypatch):
    """DOCSHIFT_OUTPUT_DIR env var is picked up by load_config."""
    monkeypatch.setenv("DOCSHIFT_OUTPUT_DIR", "env-out")
    settings = load_config()
    assert settings.output_dir == "env-out"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """DOCSHIFT_OUTPUT_DIR takes precedence over config.yaml output_dir."""
    (tmp_path / "config.yaml").write_text("output_dir: project-out\n")
    monkeypatch.setenv("DOCSHIFT_OUTPUT_DIR", "override-out")
    settings = load_config()
    assert settings.output_dir == "override-out"


def test_load_config_reads_config_yaml(tmp_path, monkeypatch):
    """Values in config.yaml are applied when no env var is set."""
    monkeypatch.delenv("DOCSHIFT_CODE_FONT", raising=False)
    (tmp_path / "config.yaml").write_text("code_font: Consolas\n")
    settings = load_config()
    assert settings.code_font == "Consolas"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("DOCSHIFT_OUTPUT_DIR", "env-out")
    settings = load_config(overrides={"output_dir": "cli-out"})
    assert settings.output_dir == "cli-out"


def test_load_config_none_override_ignored(monkeypatch):
    """None-valued overrides leave the lower-precedence value in place."""
    monkeypatch.setenv("DOCSHIFT_PARSER_CONFIG", "commonmark")
    settings = load_config(overrides={"parser_config": None})
    assert settings.parser_config == "commonmark"


def test_load_config_defaults(monkeypatch):
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    for name in ("OUTPUT_DIR", "PARSER_CONFIG", "CODE_FONT_SIZE"):
        monkeypatch.delenv(f"DOCSHIFT_{name}", raising=False)
    settings = load_config()
    assert settings.output_dir == "converted"
    assert settings.parser_config == "gfm-like"
    assert settings.code_font_size == 10


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_env_code_font_size(monkeypatch):
    """DOCSHIFT_CODE_FONT_SIZE env var is coerced to int and applied to settings."""
    monkeypatch.setenv("DOCSHIFT_CODE_FONT_SIZE", "12")
    settings = load_config()
    assert settings.code_font_size == 12


@pytest.mark.parametrize("field,value", [
    ("code_shading", "not-a-color"),
    ("log_level", "LOUD"),
    ("code_font_size", 0),
])
def test_load_config_rejects_invalid_values(field, value):
    """Out-of-range or malformed values raise a ValueError (pydantic ValidationError)."""
    with pytest.raises(ValueError):
        load_config(overrides={field: value})


def test_load_config_image_bounds_from_env(monkeypatch):
    """Integer settings given as env strings are coerced and validated."""
    monkeypatch.setenv("DOCSHIFT_IMAGE_MAX_WIDTH", "800")
    settings = load_config()
    assert settings.image_max_width == 800
    assert settings.image_max_height is None


def test_load_config_rejects_bad_quality(monkeypatch):
    """image_quality outside 1-100 fails validation."""
    monkeypatch.setenv("DOCSHIFT_IMAGE_QUALITY", "0")
    with pytest.raises(ValueError):
        load_config()

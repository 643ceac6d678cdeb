"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:           str = "docshift"
    output_dir:         str = Field(default="converted", description="Directory for converted files")
    parser_config:      str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    log_level:          str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    code_font:          str = Field(default="Courier New", description="Monospace font for code")
    code_font_size:     int = Field(default=10, ge=1, description="Code font size in points")
    code_shading:       str = Field(default="F3F4F6", pattern="^[0-9A-Fa-f]{6}$", description="Code background fill")
    quote_border_color: str = Field(default="CCCCCC", pattern="^[0-9A-Fa-f]{6}$", description="Blockquote left border")
    text_encoding:      str = Field(default="utf-8", description="Encoding for txt -> txt conversion")
    image_quality:      int = Field(default=92, ge=1, le=100, description="Encoder quality for jpg / webp output")
    image_max_width:    Optional[int] = Field(default=None, ge=1, description="Shrink converted images to this width")
    image_max_height:   Optional[int] = Field(default=None, ge=1, description="Shrink converted images to this height")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then DOCSHIFT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"DOCSHIFT_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

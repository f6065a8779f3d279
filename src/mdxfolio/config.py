"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDXFOLIO_"


class Settings(BaseModel):
    content_dir:     str  = Field(default="content/posts", description="Directory holding the post files")
    extension:       str  = Field(default=".mdx", pattern=r"^\.\w+$", description="Post file extension")
    output_dir:      str  = Field(default="dist", description="Directory for the exported static site")
    base_url:        str  = Field(default="https://your-domain.com", description="Absolute site URL for the sitemap")
    site_title:      str  = Field(default="Blog", description="Suffix for page titles")
    lenient:         bool = Field(default=True, description="Skip malformed posts instead of failing")
    extended_syntax: bool = Field(default=True, description="Enable tables and strikethrough")
    math:            bool = Field(default=True, description="Recognize $inline$ and $$block$$ math")
    typeset_math:    bool = Field(default=True, description="Convert math to MathML")
    log_level:       str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDXFOLIO_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

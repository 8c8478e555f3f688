"""Application configuration: settings schema and config.yaml loader"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    app_name:      str = "mdfolio"
    content_dir:   str = Field(default="src/data/content",  description="Content root scanned for pages")
    content_ext:   str = Field(default=".md", pattern=r"^\.\w+$", description="Content file extension")
    output_file:   str = Field(default="dist/content.json", description="Where the generated tree is written")
    output_format: str = Field(default="json", pattern="^(json|js)$", description="json or js (ES module)")
    export_name:   str = Field(default="contentTree", pattern=r"^[A-Za-z_$][\w$]*$", description="Export name for js output")
    root_file:     Optional[str] = Field(default=None, description="YAML list of hand-authored nodes placed before the content tree")
    duplicate_ids: str = Field(default="warn", pattern="^(warn|error)$", description="warn or error on duplicate node ids")
    render_html:   bool = Field(default=False, description="Add rendered HTML to text blocks")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt preset used when rendering HTML")
    poll_interval: float = Field(default=0.5, gt=0, description="Watcher poll interval in seconds")
    log_level:     str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDFOLIO_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDFOLIO_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

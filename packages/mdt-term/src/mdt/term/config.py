"""Render configuration with layered loading.

Precedence, lowest to highest: built-in defaults (including what the terminal
reports), the JSON settings file at ``$MDT_CONFIG_DIR/config.json``
(``~/.mdt/config.json`` by default), then explicit overrides from the CLI.
Settings file keys may be camelCase or snake_case.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from mdt.term.errors import ConfigError
from mdt.term.terminal import detect_capabilities, terminal_size

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".mdt"
CONFIG_FILE_NAME = "config.json"


class RenderConfig(BaseModel):
    """Everything the renderer needs to know about the target display."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    truecolor: bool = Field(default_factory=lambda: detect_capabilities().true_color)
    ascii_tables: bool = Field(default=False, alias="asciiTables")
    width: int = Field(default_factory=lambda: terminal_size()[0], ge=1)
    height: int = Field(default_factory=lambda: terminal_size()[1], ge=1)
    theme: str = "monokai"
    code_indent: int = Field(default=2, ge=0, alias="codeIndent")
    code_background: bool = Field(default=False, alias="codeBackground")
    hard_breaks: bool = Field(default=False, alias="hardBreaks")

    @field_validator("theme")
    @classmethod
    def _known_theme(cls, value: str) -> str:
        try:
            get_style_by_name(value)
        except ClassNotFound:
            raise ValueError(f"unknown Pygments style {value!r}") from None
        return value


def get_config_dir() -> Path:
    return Path(os.environ.get("MDT_CONFIG_DIR", Path.home() / CONFIG_DIR_NAME))


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases onto field names so later layers override cleanly."""
    result = dict(data)
    for name, field in RenderConfig.model_fields.items():
        if field.alias and field.alias in result:
            result[name] = result.pop(field.alias)
    return result


def read_settings_file(path: Path) -> dict[str, Any]:
    """Read a JSON settings file. A missing file yields ``{}``."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}", e) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object")
    logger.debug("Loaded settings from %s", path)
    return _normalize_keys(data)


def load_config(
    overrides: dict[str, Any] | None = None,
    *,
    path: Path | None = None,
) -> RenderConfig:
    """Build a :class:`RenderConfig` from defaults, settings file and overrides.

    ``None`` values in *overrides* are treated as "not given".
    """
    merged = read_settings_file(path or get_config_path())
    for key, value in _normalize_keys(overrides or {}).items():
        if value is not None:
            merged[key] = value
    try:
        return RenderConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", e) from e

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_OUTPUT_SHEET,
    DEFAULT_PREVIEW_ROWS,
    NormalizeConfig,
    PeriodLabels,
    TemplateConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default: config/normalize.yml)
- Validate against config_schema.json (next to this module)
- Apply defaults for optional keys
- Apply environment overrides (PAGU_SOURCE_DIRECTORY / PAGU_OUTPUT_DIRECTORY)
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/normalize.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

ENV_SOURCE_DIRECTORY = "PAGU_SOURCE_DIRECTORY"
ENV_OUTPUT_DIRECTORY = "PAGU_OUTPUT_DIRECTORY"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> NormalizeConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    labels_raw = data.get("period_labels") or {}
    template_raw = data.get("template") or {}
    # 環境変数 (.env 含む) が YAML より優先
    source_directory = os.getenv(ENV_SOURCE_DIRECTORY) or data["source_directory"]
    output_directory = os.getenv(ENV_OUTPUT_DIRECTORY) or data["output_directory"]
    return NormalizeConfig(
        source_directory=source_directory,
        output_directory=output_directory,
        output_sheet_name=data.get("output_sheet_name", DEFAULT_OUTPUT_SHEET),
        preview_rows=data.get("preview_rows", DEFAULT_PREVIEW_ROWS),
        period_labels=PeriodLabels(**labels_raw),
        template=TemplateConfig(**template_raw),
    )

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load the optional YAML config (config/convert.yml by default)
- Validate it against config_schema.json (no unknown keys)
- Apply defaults for every missing key
- Apply CSV2JSON_* environment overrides (.env is loaded by the CLI first)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/convert.yml")

ENV_INPUT_ROOT = "CSV2JSON_INPUT_ROOT"
ENV_OUTPUT_ROOT = "CSV2JSON_OUTPUT_ROOT"
ENV_FOLDER = "CSV2JSON_FOLDER"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ConvertConfig:
    input_root: str = "input"  # parent of the per-folder CSV directories
    output_root: str = "output"  # parent of the per-folder JSON directories
    excluded_files: tuple[str, ...] = ("daemons.csv",)  # never converted
    json_indent: int = 2
    encoding: str = "utf-8-sig"  # strips a UTF-8 BOM from the header line
    error_log_dir: str = "logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

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


def load_config(path: Path) -> ConvertConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = ConvertConfig()
    return ConvertConfig(
        input_root=data.get("input_root", defaults.input_root),
        output_root=data.get("output_root", defaults.output_root),
        excluded_files=tuple(data.get("excluded_files", defaults.excluded_files)),
        json_indent=data.get("json_indent", defaults.json_indent),
        encoding=data.get("encoding", defaults.encoding),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
    )


def apply_env_overrides(cfg: ConvertConfig, environ: Mapping[str, str] | None = None) -> ConvertConfig:
    """Environment variables win over the YAML file."""
    env = os.environ if environ is None else environ
    changes: dict[str, str] = {}
    if env.get(ENV_INPUT_ROOT):
        changes["input_root"] = env[ENV_INPUT_ROOT]
    if env.get(ENV_OUTPUT_ROOT):
        changes["output_root"] = env[ENV_OUTPUT_ROOT]
    return replace(cfg, **changes) if changes else cfg


def resolve_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> ConvertConfig:
    """Load the effective configuration.

    An explicit ``path`` must exist. Without one, config/convert.yml is used
    when present and built-in defaults otherwise.
    """
    if path is not None:
        cfg = load_config(path)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = ConvertConfig()
    return apply_env_overrides(cfg, environ)

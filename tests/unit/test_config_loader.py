from __future__ import annotations

from pathlib import Path

import pytest

from csv2json.config.loader import (
    ConfigError,
    ConvertConfig,
    apply_env_overrides,
    load_config,
    resolve_config,
)


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.input_root == "./input"
    assert cfg.output_root == "./output"
    assert cfg.excluded_files == ("daemons.csv",)
    assert cfg.json_indent == 2
    assert cfg.encoding == "utf-8-sig"


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_partial_uses_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "convert.yml"
    cfg_path.write_text("json_indent: 4\n", encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg == ConvertConfig(json_indent=4)


def test_load_config_empty_file_is_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "convert.yml"
    cfg_path.write_text("", encoding="utf-8")
    assert load_config(cfg_path) == ConvertConfig()


def test_load_config_extra_field(write_config: Path):
    write_config.write_text(write_config.read_text(encoding="utf-8") + "extra_field: nope\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_negative_indent(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("json_indent: 2", "json_indent: -1")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_wrong_type(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace(
        "excluded_files:\n  - daemons.csv\n", "excluded_files: daemons.csv\n"
    )
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "convert.yml"
    cfg_path.write_text("input_root: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(cfg_path)


def test_load_config_non_mapping_root(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "convert.yml"
    cfg_path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_resolve_config_defaults_without_file(temp_workdir: Path):
    assert resolve_config(environ={}) == ConvertConfig()


def test_resolve_config_picks_up_default_path(write_config: Path):
    assert resolve_config(environ={}).input_root == "./input"


def test_resolve_config_explicit_missing_path(temp_workdir: Path):
    with pytest.raises(ConfigError):
        resolve_config(temp_workdir / "other.yml", environ={})


def test_env_overrides():
    cfg = apply_env_overrides(
        ConvertConfig(),
        {"CSV2JSON_INPUT_ROOT": "/data/in", "CSV2JSON_OUTPUT_ROOT": "/data/out"},
    )
    assert cfg.input_root == "/data/in"
    assert cfg.output_root == "/data/out"


def test_empty_env_values_ignored():
    assert apply_env_overrides(ConvertConfig(), {"CSV2JSON_INPUT_ROOT": ""}) == ConvertConfig()

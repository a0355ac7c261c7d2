# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

FOLDER = "monsters"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "input" / FOLDER).mkdir(parents=True)
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        for var in ("CSV2JSON_INPUT_ROOT", "CSV2JSON_OUTPUT_ROOT", "CSV2JSON_FOLDER"):
            monkeypatch.delenv(var, raising=False)
        yield p


@pytest.fixture()
def input_dir(temp_workdir: Path) -> Path:
    return temp_workdir / "input" / FOLDER


@pytest.fixture()
def output_dir(temp_workdir: Path) -> Path:
    return temp_workdir / "output" / FOLDER


@pytest.fixture()
def sample_config_yaml() -> str:
    return """input_root: ./input
output_root: ./output
excluded_files:
  - daemons.csv
json_indent: 2
encoding: utf-8-sig
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "convert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def goblin_csv(input_dir: Path) -> Path:
    f = input_dir / "goblins.csv"
    f.write_text(
        "name,stats.hp,stats.mp,aptitudes,damage,type,description\n"
        "Goblin,10,5,W-2,3,slash,\n",
        encoding="utf-8",
    )
    return f


@pytest.fixture()
def sample_csv_files(input_dir: Path, goblin_csv: Path) -> list[Path]:
    spells = input_dir / "spells.csv"
    spells.write_text(
        "name,tags,damage,type,description\n"
        "Fireball,,12,fire,Burns things\n"
        "Heal,,,,\n",
        encoding="utf-8",
    )
    daemons = input_dir / "daemons.csv"
    daemons.write_text("name\nShould not convert\n", encoding="utf-8")
    return [goblin_csv, spells, daemons]


@pytest.fixture(autouse=True)
def _detach_app_logger():
    """Drop handlers bound to a previous test's captured stdout."""
    import logging

    from csv2json.logging.init import LOGGER_NAME, reset_logging

    yield
    reset_logging()
    app_logger = logging.getLogger(LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True

from __future__ import annotations

import json
from pathlib import Path

from csv2json.cli import main as cli_main
from csv2json.logging.init import reset_logging

"""Error log lines carry exactly the fixed key set; file-level errors use row=-1."""

REQUIRED_KEYS = {"timestamp", "file", "row", "error_type", "message"}


def test_error_log_written_for_failed_file(temp_workdir: Path, input_dir: Path, capsys):
    reset_logging()
    (input_dir / "ok.csv").write_text("name\nImp\n", encoding="utf-8")
    (input_dir / "broken.csv").write_bytes(b"a,b\n\xff\xfe\n")

    assert cli_main(["monsters"]) == 2

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    lines = [json.loads(raw) for raw in logs[0].read_text(encoding="utf-8").splitlines()]
    assert len(lines) == 1
    assert set(lines[0]) == REQUIRED_KEYS
    assert lines[0]["file"] == "broken.csv"
    assert lines[0]["row"] == -1
    assert lines[0]["error_type"] == "CSV_PARSE_ERROR"
    assert lines[0]["timestamp"].endswith("Z")


def test_no_error_log_on_clean_run(temp_workdir: Path, input_dir: Path, capsys):
    reset_logging()
    (input_dir / "ok.csv").write_text("name\nImp\n", encoding="utf-8")
    assert cli_main(["monsters"]) == 0
    assert list((temp_workdir / "logs").glob("errors-*.log")) == []


def test_dropped_line_logged_without_row(temp_workdir: Path, input_dir: Path, capsys):
    reset_logging()
    (input_dir / "wide.csv").write_text("name\nImp\nOgre,extra\n", encoding="utf-8")

    assert cli_main(["monsters"]) == 0

    log = next((temp_workdir / "logs").glob("errors-*.log"))
    lines = [json.loads(raw) for raw in log.read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["row"], r["error_type"]) for r in lines] == [("wide.csv", -1, "ROW_PARSE_ERROR")]
    assert set(lines[0]) == REQUIRED_KEYS

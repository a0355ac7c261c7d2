from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from csv2json.config.loader import ENV_FOLDER, ConfigError, resolve_config
from csv2json.logging.init import log_summary, set_debug, setup_logging
from csv2json.services.orchestrator import ProcessingError, convert_all
from csv2json.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (overrides the process environment)
- Resolve the folder name (positional argument, else CSV2JSON_FOLDER)
- Load config, apply command-line overrides
- Convert <input_root>/<folder>/*.csv into <output_root>/<folder>/*.json
- Print the SUMMARY line and map the result to an exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; values win over the existing environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="csv2json", description="Game-data CSV -> JSON converter")
    p.add_argument("folder", nargs="?", help=f"Folder name under the input root (default: ${ENV_FOLDER})")
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default: config/convert.yml if present)")
    p.add_argument("--input-root", default=None, help="Override input_root")
    p.add_argument("--output-root", default=None, help="Override output_root")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _folder_name(args: argparse.Namespace) -> str | None:
    if args.folder:
        return args.folder
    return os.getenv(ENV_FOLDER) or None


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no explicit list is given (an empty list is valid)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    folder = _folder_name(args)
    if not folder:
        logger.error("Missing output folder name argument")
        return EXIT_FATAL

    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.input_root:
        cfg = replace(cfg, input_root=args.input_root)
    if args.output_root:
        cfg = replace(cfg, output_root=args.output_root)

    logger.info(f"Converting files from: {Path(cfg.input_root) / folder}")

    try:
        result = convert_all(cfg, folder)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    for stat in result.file_stats or []:
        logger.debug(
            "file=%s status=%s rows=%d failed_rows=%d elapsed_sec=%.3f",
            stat.file_name,
            stat.status,
            stat.converted_rows,
            stat.failed_rows,
            stat.elapsed_seconds,
        )

    # render_summary_line includes the label; log_summary adds it again
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Command line entry point.

Usage:
    go test -json ./... > results.jsonl
    qase-testing-reporter -p DEMO -t <token> -r "Nightly" results.jsonl
    go test -json ./... | qase-testing-reporter -
"""

import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from . import __version__
from .client import QaseClient
from .config import load_config
from .errors import CapacityExceededError, ReporterError
from .reporter import run_report

logger = logging.getLogger(__name__)

PROG = "qase-testing-reporter"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_version() -> str:
    try:
        return version(PROG)
    except PackageNotFoundError:
        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Report go test -json results to Qase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Test names reference Qase cases with QASE-<id>, e.g. TestLogin/QASE-12.
Every referenced case gets one result in a new test run.

Environment:
  QASE_TESTOPS_API_TOKEN   API token (--api-token)
  QASE_TESTOPS_PROJECT     Project code (--project)
  QASE_TESTOPS_RUN_TITLE   Run title (--run-title)
  QASE_TESTOPS_API_HOST    API host (default: qase.io)
  QASE_TESTOPS_API_TIMEOUT HTTP timeout in seconds (default: 30)
  QASE_CONFIG_PATH         YAML config file (--config)
  LOG_LEVEL                Log level (--log-level)
""",
    )
    parser.add_argument(
        "filename", nargs="?", help="go test -json output file, '-' for stdin"
    )
    parser.add_argument("--project", "-p", help="Qase project code")
    parser.add_argument("--api-token", "-t", help="Qase API token")
    parser.add_argument("--run-title", "-r", help="Qase run title")
    parser.add_argument("--config", "-c", help="YAML config file")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level")
    parser.add_argument(
        "--version", "-v", action="store_true", help="Print version and exit"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # stdout carries the JSON summary only, logs go to stderr
    level = args.log_level or os.environ.get("LOG_LEVEL", "INFO").upper()
    unknown_level = level not in LOG_LEVELS
    logging.basicConfig(
        level="INFO" if unknown_level else level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if unknown_level:
        logger.warning(f"Unknown LOG_LEVEL {level!r}, using INFO")

    if args.version:
        print(f"{PROG} {get_version()}")
        return 0

    if not args.filename:
        parser.error("the following arguments are required: filename")

    try:
        config = load_config(
            args.config,
            overrides={
                "filename": args.filename,
                "project": args.project,
                "api_token": args.api_token,
                "run_title": args.run_title,
            },
        )
        config.validate_required()
        with QaseClient.from_config(config) as client:
            output = run_report(config, client)
    except CapacityExceededError as e:
        logger.error(f"Failed to process file: {e}, {len(e.results)} results collected")
        return 1
    except ReporterError as e:
        logger.error(f"Reporting failed: {e}")
        return 1

    print(output.model_dump_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())

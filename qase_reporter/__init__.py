"""
Qase Testing Reporter
=====================
Reports ``go test -json`` results to Qase TestOps.

Test names reference Qase cases with ``QASE-<id>``. Every reference becomes
one result in a freshly created test run.

Usage:
    from qase_reporter import QaseClient, load_config, run_report

    config = load_config(overrides={"filename": "results.jsonl"})
    config.validate_required()
    with QaseClient.from_config(config) as client:
        output = run_report(config, client)
    print(output.model_dump_json())
"""

__version__ = "1.0.0"

from .client import QaseClient
from .config import ReporterConfig, load_config
from .extractor import parse_case_ids
from .parser import parse_line
from .reporter import run_report
from .results import (
    MAX_BULK_RESULTS,
    build_output,
    collect_results,
    load_results,
    project_record,
)

__all__ = [
    "MAX_BULK_RESULTS",
    "QaseClient",
    "ReporterConfig",
    "build_output",
    "collect_results",
    "load_config",
    "load_results",
    "parse_case_ids",
    "parse_line",
    "project_record",
    "run_report",
]

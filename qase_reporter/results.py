"""Turning event lines into Qase result entries and the run summary."""

import logging
import sys
from pathlib import Path
from typing import Iterable, Union

from .errors import CapacityExceededError, InputReadError, LineError
from .extractor import parse_case_ids
from .models import (
    STATUS_BY_ACTION,
    ReportOutput,
    ResultEntry,
    TestRecord,
    TestRunOutput,
)
from .parser import parse_line

logger = logging.getLogger(__name__)

# Qase accepts at most this many results per bulk request.
MAX_BULK_RESULTS = 2000

STDIN_PATH = "-"


def project_record(record: TestRecord) -> list[ResultEntry]:
    """Build one result entry per case ID referenced in the test name.

    IDs keep their order of occurrence and duplicates are not merged.
    A test name without IDs yields an empty list.
    """
    time_ms = 0
    if record.elapsed:
        time_ms = int(record.elapsed * 1000)
        logger.debug(f"Elapsed {record.elapsed}s -> {time_ms}ms ({record.test})")

    return [
        ResultEntry(
            case_id=case_id,
            status=STATUS_BY_ACTION[record.action],
            package=record.package,
            time=record.time,
            time_ms=time_ms,
        )
        for case_id in parse_case_ids(record.test)
        if case_id > 0
    ]


def collect_results(
    lines: Iterable[str], limit: int = MAX_BULK_RESULTS
) -> list[ResultEntry]:
    """Accumulate result entries from event lines in input order.

    Malformed lines are skipped. Raises CapacityExceededError carrying the
    partial batch as soon as ``limit`` entries have been collected.
    """
    results: list[ResultEntry] = []
    skipped = 0

    for line_no, line in enumerate(lines, start=1):
        try:
            record = parse_line(line)
        except LineError as e:
            skipped += 1
            logger.debug(f"Skipping line {line_no}: {e}")
            continue

        for entry in project_record(record):
            results.append(entry)
            if len(results) == limit:
                raise CapacityExceededError(results, limit)

    logger.debug(f"Collected {len(results)} result(s), skipped {skipped} line(s)")
    return results


def _stdin():
    """stdin decoded like input files: bad bytes only spoil their own line."""
    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8", errors="replace")
    return sys.stdin


def load_results(path: Union[str, Path]) -> list[ResultEntry]:
    """Read an event file (``-`` for stdin) and collect its results.

    Failing to open or read the source raises InputReadError; whatever was
    collected up to that point is discarded.
    """
    try:
        if str(path) == STDIN_PATH:
            return collect_results(_stdin())
        with open(path, encoding="utf-8", errors="replace") as f:
            return collect_results(f)
    except OSError as e:
        raise InputReadError(f"failed to read {path}: {e}") from e


def build_output(run_id: int, results: Iterable[ResultEntry]) -> ReportOutput:
    """Shape the submitted results into the printed run summary."""
    return ReportOutput(
        run_id=run_id,
        test_runs=[
            TestRunOutput(test_case_id=entry.case_id, status=entry.status)
            for entry in results
            if entry.case_id
        ],
    )

"""Reporting pipeline: read results, create run, submit, complete."""

import logging
from datetime import datetime, timezone

from .client import QaseClient
from .config import ReporterConfig
from .models import ReportOutput
from .results import build_output, load_results

logger = logging.getLogger(__name__)


def default_run_title() -> str:
    return f"Automated run {datetime.now(timezone.utc).isoformat(timespec='seconds')}"


def run_report(config: ReporterConfig, client: QaseClient) -> ReportOutput:
    """Report the results in ``config.filename`` as a new Qase test run.

    Any error stops the pipeline. A run that was already created is left
    as is on the Qase side.
    """
    results = load_results(config.filename)
    logger.info(f"Collected {len(results)} result(s) from {config.filename}")

    title = config.run_title or default_run_title()
    run_id = client.create_run(
        config.project, title, [entry.case_id for entry in results]
    )
    client.create_results_bulk(config.project, run_id, results)
    client.complete_run(config.project, run_id)

    return build_output(run_id, results)

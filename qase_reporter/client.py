"""Qase TestOps API client.

Handles:
- Test run creation
- Bulk result submission
- Run completion
"""

import logging
from typing import Any, Optional

import httpx

from .config import ReporterConfig
from .errors import QaseAPIError
from .models import ResultEntry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.qase.io/v1"


class QaseClient:
    """Synchronous Qase API client for a single reporting run."""

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {"Token": api_token}
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_config(
        cls, config: ReporterConfig, http: Optional[httpx.Client] = None
    ) -> "QaseClient":
        return cls(
            api_token=config.api_token,
            base_url=config.base_url,
            timeout=config.timeout,
            http=http,
        )

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "QaseClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Runs ---

    def create_run(self, project: str, title: str, case_ids: list[int]) -> int:
        """Create a test run covering ``case_ids`` and return its ID."""
        data = self._post(
            "create test run",
            f"/run/{project}",
            {"title": title, "cases": case_ids},
        )
        try:
            run_id = int(data["result"]["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise QaseAPIError(
                f"failed to create test run, no run ID in response: {data}"
            ) from e
        logger.info(f"Created test run {run_id} in project {project}")
        return run_id

    def complete_run(self, project: str, run_id: int) -> None:
        """Mark a test run as complete."""
        self._post("complete test run", f"/run/{project}/{run_id}/complete")
        logger.info(f"Completed test run {run_id}")

    # --- Results ---

    def create_results_bulk(
        self, project: str, run_id: int, results: list[ResultEntry]
    ) -> None:
        """Submit all results for a run in a single bulk request."""
        payload = {"results": [self._result_payload(entry) for entry in results]}
        self._post(
            "create test run results",
            f"/result/{project}/{run_id}/bulk",
            payload,
        )
        logger.info(f"Submitted {len(results)} result(s) to run {run_id}")

    # --- Internal ---

    @staticmethod
    def _result_payload(entry: ResultEntry) -> dict[str, Any]:
        # Start time is not sent, the bulk endpoint rejects it
        payload: dict[str, Any] = {
            "case_id": entry.case_id,
            "status": entry.status.value,
            "time_ms": entry.time_ms,
        }
        if entry.comment:
            payload["comment"] = entry.comment
        return payload

    def _post(
        self, action: str, path: str, payload: Optional[dict] = None
    ) -> dict[str, Any]:
        """POST to the API and return the decoded body.

        Raises QaseAPIError on transport errors, non-200 responses and
        bodies reporting ``"status": false``.
        """
        try:
            resp = self._http.post(
                f"{self.base_url}{path}", headers=self.headers, json=payload
            )
        except httpx.HTTPError as e:
            raise QaseAPIError(f"failed to {action}: {e}") from e

        if resp.status_code != 200:
            raise QaseAPIError(
                f"failed to {action}, status code: {resp.status_code} {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise QaseAPIError(
                f"failed to {action}, invalid JSON response",
                status_code=resp.status_code,
                body=resp.text,
            ) from e

        if not isinstance(data, dict) or not data.get("status"):
            raise QaseAPIError(
                f"failed to {action}, status false",
                status_code=resp.status_code,
                body=resp.text,
            )
        return data

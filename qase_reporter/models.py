"""Data models for test records, result entries and the run summary."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TestAction(str, Enum):
    """Terminal ``go test -json`` actions we report."""

    __test__ = False  # prevent pytest collection

    PASS = "pass"
    FAIL = "fail"


class ResultStatus(str, Enum):
    """Result status as understood by Qase."""

    PASSED = "passed"
    FAILED = "failed"


STATUS_BY_ACTION = {
    TestAction.PASS: ResultStatus.PASSED,
    TestAction.FAIL: ResultStatus.FAILED,
}


class TestRecord(BaseModel):
    """One validated test event line."""

    __test__ = False  # prevent pytest collection

    test: str = Field(..., min_length=1, description="Full test name, subtests included")
    action: TestAction
    package: str = ""
    time: Optional[datetime] = None  # UTC
    elapsed: float = Field(default=0.0, ge=0, description="Seconds")


class ResultEntry(BaseModel):
    """A single case result ready for bulk submission."""

    case_id: int = Field(..., gt=0)
    status: ResultStatus
    package: str = ""
    time: Optional[datetime] = None
    time_ms: int = Field(default=0, ge=0)

    @property
    def comment(self) -> Optional[str]:
        return f"Package: {self.package}" if self.package else None


class TestRunOutput(BaseModel):
    """Case/status pair as printed in the run summary."""

    __test__ = False  # prevent pytest collection

    test_case_id: int
    status: ResultStatus


class ReportOutput(BaseModel):
    """Summary printed to stdout after a successful run."""

    run_id: int
    test_runs: list[TestRunOutput] = []

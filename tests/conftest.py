"""
Reporter Test Configuration

Shared fixtures for all tests.
"""
import json
from typing import Dict, List

import httpx
import pytest

from qase_reporter.client import QaseClient


# =============================================================================
# FIXTURES: Sample Data
# =============================================================================

@pytest.fixture
def sample_lines() -> List[str]:
    """A realistic slice of go test -json output."""
    return [
        '{"Time":"2024-05-27T19:58:09.100+07:00","Action":"start","Package":"github.com/test"}',
        '{"Time":"2024-05-27T19:58:09.200+07:00","Action":"run","Package":"github.com/test","Test":"TestLogin/QASE-1"}',
        '{"Time":"2024-05-27T19:58:09.300+07:00","Action":"output","Package":"github.com/test","Test":"TestLogin/QASE-1","Output":"=== RUN   TestLogin/QASE-1\\n"}',
        '{"Time":"2024-05-27T19:58:09.400+07:00","Action":"pass","Package":"github.com/test","Test":"TestLogin/QASE-1","Elapsed":0.25}',
        '{"Time":"2024-05-27T19:58:09.500+07:00","Action":"fail","Package":"github.com/test","Test":"TestLogout/QASE-2","Elapsed":1.5}',
        '{"Time":"2024-05-27T19:58:09.600+07:00","Action":"pass","Package":"github.com/test","Test":"TestNoCase","Elapsed":0.1}',
        '{"Time":"2024-05-27T19:58:09.700+07:00","Action":"pass","Package":"github.com/test","Elapsed":2}',
        "",
    ]


@pytest.fixture
def results_file(tmp_path, sample_lines):
    """sample_lines written to a .jsonl file."""
    path = tmp_path / "results.jsonl"
    path.write_text("\n".join(sample_lines) + "\n")
    return path


# =============================================================================
# FIXTURES: Qase API Mock
# =============================================================================

class FakeQaseAPI:
    """Records requests and answers like the Qase API."""

    def __init__(self, run_id: int = 42):
        self.run_id = run_id
        self.requests: List[httpx.Request] = []
        self.responses: Dict[str, httpx.Response] = {}

    def fail(self, action: str, response: httpx.Response):
        """Override the response for "create", "bulk" or "complete"."""
        self.responses[action] = response

    def bodies(self) -> List[dict]:
        return [json.loads(r.content) if r.content else None for r in self.requests]

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/complete"):
            action = "complete"
        elif path.endswith("/bulk"):
            action = "bulk"
        else:
            action = "create"
        if action in self.responses:
            return self.responses[action]
        if action == "create":
            return httpx.Response(200, json={"status": True, "result": {"id": self.run_id}})
        return httpx.Response(200, json={"status": True})


@pytest.fixture
def fake_api() -> FakeQaseAPI:
    return FakeQaseAPI()


@pytest.fixture
def qase_client(fake_api):
    """QaseClient wired to the fake API."""
    http = httpx.Client(transport=httpx.MockTransport(fake_api))
    client = QaseClient(api_token="test-token-12345", http=http)
    yield client
    http.close()

"""Shared test fixtures."""
import base64
from typing import List

import pytest

from provisioner.errors import ProviderError
from provisioner.gh_api import CommitRef, ProviderClient, RepoRef
from provisioner.models import DeliveryOutcome, TaskRequest
from provisioner.orchestrator import TaskOrchestrator
from provisioner.settings import Settings

SECRET = "s3cret"
OWNER = "octocat"


class FakeProvider(ProviderClient):
    """Records every call; `fail` maps an operation name to the error it should raise."""

    def __init__(self, commits=None):
        self.calls: List[tuple] = []
        self.fail = {}
        self.fail_on_path = None
        self.commits = [CommitRef("abc123", "Add LICENSE")] if commits is None else commits

    def _maybe_fail(self, op):
        if op in self.fail:
            raise self.fail[op]

    def create_repository(self, name, description):
        self.calls.append(("create_repository", name, description))
        self._maybe_fail("create_repository")
        return RepoRef(OWNER, name)

    def write_file(self, repo, path, content):
        self.calls.append(("write_file", repo.name, path))
        if path == self.fail_on_path:
            raise ProviderError("write_file", "HTTP 409: conflict", status=409)
        self._maybe_fail("write_file")

    def enable_static_hosting(self, repo):
        self.calls.append(("enable_static_hosting", repo.name))
        self._maybe_fail("enable_static_hosting")

    def list_commits(self, repo):
        self.calls.append(("list_commits", repo.name))
        self._maybe_fail("list_commits")
        return list(self.commits)

    def operations(self):
        return [c[0] for c in self.calls]


class RecordingNotifier:
    def __init__(self, delivered=True, raises=None):
        self.sent = []
        self.delivered = delivered
        self.raises = raises

    def notify(self, url, payload):
        self.sent.append((url, payload))
        if self.raises:
            raise self.raises
        return DeliveryOutcome(url=url, attempts=1 if self.delivered else 5, delivered=self.delivered)


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else str(body))
        self.content = b"" if body is None and not text else b"x"

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    """Stands in for requests.Session; `responses` are returned (or raised) in order."""

    def __init__(self, responses=None):
        self.headers = {}
        self.requests = []
        self.responses = list(responses or [])

    def request(self, method, url, timeout=None, **kwargs):
        self.requests.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FixedClock:
    def __init__(self, start=1700000000000):
        self.value = start

    def __call__(self):
        ts = self.value
        self.value += 1
        return ts


def data_uri(text: str, mime: str = "text/plain") -> str:
    return f"data:{mime};base64," + base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        EXPECTED_SECRET=SECRET,
        GITHUB_TOKEN="ghp_test",
        GITHUB_USERNAME=OWNER,
        LOG_FILE_PATH="/nonexistent/provisioner.log",
    )


@pytest.fixture()
def provider():
    return FakeProvider()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def orchestrator(settings, provider, notifier):
    return TaskOrchestrator(settings, provider, notifier, clock=FixedClock())


@pytest.fixture()
def make_request():
    def _make(**overrides):
        body = {
            "email": "student@example.com",
            "secret": SECRET,
            "task": "sales-summary",
            "round": 1,
            "nonce": "ab12-cd34",
            "brief": "Publish a sales summary page",
            "checks": ["Page shows #total-sales"],
            "evaluation_url": "https://eval.example.com/notify",
            "attachments": [],
        }
        body.update(overrides)
        return TaskRequest(**body)

    return _make

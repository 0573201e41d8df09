import pytest
import requests

from provisioner import notifier as notifier_mod
from provisioner.notifier import Notifier, delay_for


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code
        self.text = ""


@pytest.fixture()
def posts(monkeypatch):
    """Script requests.post: each entry is a status code or an exception to raise."""
    script = []
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        outcome = script.pop(0) if script else 200
        if isinstance(outcome, Exception):
            raise outcome
        return FakeResponse(outcome)

    monkeypatch.setattr(notifier_mod.requests, "post", fake_post)
    return script, calls


def test_delay_doubles_from_one_second():
    assert [delay_for(n) for n in range(1, 6)] == [1, 2, 4, 8, 16]
    assert delay_for(3, base_delay=0.5) == 2.0


def test_first_success_sends_once(posts):
    script, calls = posts
    sleeps = []
    outcome = Notifier(sleep=sleeps.append).notify("https://eval.example.com/cb", {"task": "t"})
    assert outcome.delivered
    assert outcome.attempts == 1
    assert sleeps == []
    assert calls[0]["json"] == {"task": "t"}
    assert calls[0]["headers"] == {"Content-Type": "application/json"}


def test_retries_until_success(posts):
    script, calls = posts
    script.extend([500, requests.ConnectionError("refused"), 201])
    sleeps = []
    outcome = Notifier(sleep=sleeps.append).notify("https://eval.example.com/cb", {})
    assert outcome.delivered
    assert outcome.attempts == 3
    assert sleeps == [1, 2]


def test_gives_up_after_five_attempts_with_four_waits(posts, caplog):
    script, calls = posts
    script.extend([requests.ConnectionError("unreachable")] * 10)
    sleeps = []
    outcome = Notifier(sleep=sleeps.append).notify("https://eval.example.com/cb", {"a": 1})
    assert not outcome.delivered
    assert outcome.attempts == 5
    assert len(calls) == 5
    assert sleeps == [1, 2, 4, 8]
    assert "ConnectionError" in outcome.last_error
    assert "giving up" in caplog.text


def test_non_success_status_counts_as_failure(posts):
    script, calls = posts
    script.extend([404, 404, 404])
    outcome = Notifier(max_attempts=3, sleep=lambda s: None).notify("https://eval.example.com/cb", {})
    assert not outcome.delivered
    assert outcome.last_error == "HTTP 404"
    assert len(calls) == 3


def test_zero_delay_and_custom_attempts(posts):
    script, calls = posts
    script.extend([503, 503])
    sleeps = []
    outcome = Notifier(max_attempts=2, base_delay=0, sleep=sleeps.append).notify("https://x.test", {})
    assert outcome.attempts == 2
    assert sleeps == [0]

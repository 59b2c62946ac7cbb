"""Unit tests for the retrying provider HTTP client."""

from __future__ import annotations

import pytest

from claude_issue_runner.errors import ProviderHTTPError
from claude_issue_runner.runner.http import (
    RetryingHTTPClient,
    backoff_delay_ms,
    is_retryable_status,
)


def _client(session, delays: list[float], retries: int = 2) -> RetryingHTTPClient:
    return RetryingHTTPClient(session, retries=retries, sleep=delays.append)


def test_backoff_doubles_and_caps() -> None:
    assert [backoff_delay_ms(a) for a in range(6)] == [1000, 2000, 4000, 8000, 8000, 8000]


@pytest.mark.parametrize(
    ("status", "retryable"),
    [(429, True), (500, True), (503, True), (599, True), (400, False), (404, False), (401, False)],
)
def test_retryable_statuses(status: int, retryable: bool) -> None:
    assert is_retryable_status(status) is retryable


def test_success_returns_immediately(fake_session_cls, fake_response_cls) -> None:
    session = fake_session_cls([fake_response_cls(200, {"ok": True})])
    delays: list[float] = []

    resp = _client(session, delays).post_json(
        "https://api.example.test/v1", headers={"x": "y"}, payload={"a": 1}
    )

    assert resp.json() == {"ok": True}
    assert delays == []
    assert session.calls[0]["json"] == {"a": 1}
    assert session.calls[0]["headers"] == {"x": "y"}


def test_non_retryable_status_fails_on_first_attempt(fake_session_cls, fake_response_cls) -> None:
    session = fake_session_cls([fake_response_cls(404, text="not found")])
    delays: list[float] = []

    with pytest.raises(ProviderHTTPError) as excinfo:
        _client(session, delays).post_json("https://api.example.test", headers={}, payload={})

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "HTTP 404: not found"
    assert len(session.calls) == 1
    assert delays == []


def test_retryable_status_then_success(fake_session_cls, fake_response_cls) -> None:
    session = fake_session_cls(
        [fake_response_cls(429, text="slow down"), fake_response_cls(200, {"done": 1})]
    )
    delays: list[float] = []

    resp = _client(session, delays).post_json("https://api.example.test", headers={}, payload={})

    assert resp.json() == {"done": 1}
    assert delays == [1.0]
    assert len(session.calls) == 2


def test_retries_exhausted_surfaces_last_error(fake_session_cls, fake_response_cls) -> None:
    session = fake_session_cls(
        [
            fake_response_cls(500, text="boom-1"),
            fake_response_cls(429, text="boom-2"),
            fake_response_cls(503, text="boom-3"),
        ]
    )
    delays: list[float] = []

    with pytest.raises(ProviderHTTPError) as excinfo:
        _client(session, delays).post_json("https://api.example.test", headers={}, payload={})

    assert str(excinfo.value) == "HTTP 503: boom-3"
    assert len(session.calls) == 3
    assert delays == [1.0, 2.0, 4.0]


def test_delay_is_capped_for_large_budgets(fake_session_cls, fake_response_cls) -> None:
    session = fake_session_cls([fake_response_cls(500) for _ in range(6)])
    delays: list[float] = []

    with pytest.raises(ProviderHTTPError):
        _client(session, delays, retries=5).post_json(
            "https://api.example.test", headers={}, payload={}
        )

    assert delays == [1.0, 2.0, 4.0, 8.0, 8.0, 8.0]


def test_zero_budget_makes_a_single_attempt(fake_session_cls, fake_response_cls) -> None:
    session = fake_session_cls([fake_response_cls(500, text="down")])
    delays: list[float] = []

    with pytest.raises(ProviderHTTPError) as excinfo:
        _client(session, delays, retries=0).post_json(
            "https://api.example.test", headers={}, payload={}
        )

    assert str(excinfo.value) == "HTTP 500: down"
    assert len(session.calls) == 1
    assert delays == [1.0]


def test_negative_budget_is_rejected(fake_session_cls) -> None:
    with pytest.raises(ValueError):
        RetryingHTTPClient(fake_session_cls([]), retries=-1)

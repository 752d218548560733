from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from mission_control.config import RuntimeConfig
from mission_control.runtime.api import SlidingWindowRateLimiter
from mission_control.server.api import create_app

NOW = 1_800_000_000_000


def _client(tmp_path: Path, **overrides: object) -> TestClient:
    config = RuntimeConfig(tasks_dir=tmp_path, **overrides)  # type: ignore[arg-type]
    return TestClient(create_app(config, clock=lambda: NOW))


def test_data_route_returns_snapshot(tmp_path: Path) -> None:
    (tmp_path / "a.json").write_text(json.dumps({"id": "a", "status": "review"}), encoding="utf-8")

    with _client(tmp_path) as client:
        resp = client.get("/api/data")

    assert resp.status_code == 200
    assert resp.headers["cache-control"] == "no-store"
    body = resp.json()
    assert body["timestamp"] == NOW
    assert [task["id"] for task in body["tasks"]] == ["a"]
    assert body["stats"]["review"] == 1
    assert body["tokenStats"] is None


def test_api_key_required_when_configured(tmp_path: Path) -> None:
    with _client(tmp_path, api_key="s3cret") as client:
        missing = client.get("/api/data")
        wrong = client.get("/api/data", headers={"Authorization": "Bearer nope"})
        ok = client.get("/api/data", headers={"Authorization": "Bearer s3cret"})

    assert missing.status_code == 401
    assert missing.json() == {"error": "Unauthorized"}
    assert wrong.status_code == 401
    assert ok.status_code == 200


def test_rate_limit_per_forwarded_client(tmp_path: Path) -> None:
    with _client(tmp_path, rate_limit=2) as client:
        first = [client.get("/api/data", headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.9"}) for _ in range(3)]
        other = client.get("/api/data", headers={"X-Forwarded-For": "10.0.0.2"})

    assert [resp.status_code for resp in first] == [200, 200, 429]
    assert first[2].json() == {"error": "Too many requests"}
    assert other.status_code == 200


def test_aggregation_failure_becomes_500(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*args: object, **kwargs: object) -> None:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr("mission_control.runtime.api.routes_data.build_snapshot", _boom)

    with _client(tmp_path) as client:
        resp = client.get("/api/data")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to load data"}


def test_healthz(tmp_path: Path) -> None:
    with _client(tmp_path) as client:
        resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_rate_limiter_window_slides() -> None:
    clock = {"now": 0.0}
    limiter = SlidingWindowRateLimiter(2, window=60.0, clock=lambda: clock["now"])

    assert limiter.is_limited("a") is False
    assert limiter.is_limited("a") is False
    assert limiter.is_limited("a") is True
    clock["now"] = 59.0
    assert limiter.is_limited("a") is True
    clock["now"] = 119.5
    assert limiter.is_limited("a") is False


def test_rate_limiter_forgets_idle_clients() -> None:
    clock = {"now": 0.0}
    limiter = SlidingWindowRateLimiter(5, window=60.0, clock=lambda: clock["now"])

    for idx in range(100):
        limiter.is_limited(f"10.0.0.{idx}")
    assert len(limiter) == 100

    clock["now"] = 61.0
    assert limiter.is_limited("10.0.1.1") is False
    assert len(limiter) == 1

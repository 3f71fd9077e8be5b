"""Tests for settings parsing, startup checks and the log formatter."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient

from backend import main
from backend.config import Settings
from backend.logging_config import KeyValueFormatter


def test_pinned_now_parses_z_suffix():
    config = Settings(REFERENCE_NOW="2025-03-05T09:00:00Z")
    assert config.pinned_now == datetime(2025, 3, 5, 9, 0, tzinfo=UTC)


def test_unpinned_clock():
    assert Settings(REFERENCE_NOW="  ").pinned_now is None


def test_invalid_pinned_now_raises():
    with pytest.raises(ValueError):
        Settings(REFERENCE_NOW="next tuesday").pinned_now


def test_cors_origins_formats():
    assert Settings(CORS_ORIGINS='["https://a.example", "https://b.example"]').cors_origins_list == [
        "https://a.example",
        "https://b.example",
    ]
    assert Settings(CORS_ORIGINS="https://a.example, https://b.example").cors_origins_list == [
        "https://a.example",
        "https://b.example",
    ]
    assert Settings(CORS_ORIGINS="").cors_origins_list == []


def test_scoring_window_defaults():
    config = Settings()
    assert config.expiring_soon_window_days == 30
    assert config.sla_at_risk_hours == 24.0


def test_strict_startup_rejects_pinned_clock_in_production(monkeypatch):
    monkeypatch.setattr(
        main,
        "settings",
        Settings(APP_ENV="production", REFERENCE_NOW="2025-03-05T09:00:00Z", STRICT_STARTUP_VALIDATION=True),
    )
    with pytest.raises(RuntimeError):
        main._startup_checks()


def test_lenient_startup_only_warns(monkeypatch, caplog):
    monkeypatch.setattr(main, "settings", Settings(REFERENCE_NOW="not-a-date"))
    with caplog.at_level(logging.WARNING, logger="compliancelens"):
        main._startup_checks()
    assert any("REFERENCE_NOW" in r.getMessage() for r in caplog.records)


def test_formatter_appends_context_keys():
    record = logging.LogRecord(
        name="compliancelens.scoring",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="scoring pass completed at %s",
        args=("2025-03-05T09:00:00+00:00",),
        exc_info=None,
    )
    record.records = 42
    record.scoring_ms = 1.25

    line = KeyValueFormatter().format(record)

    assert line.startswith("[INFO   ]")
    assert "compliancelens.scoring: scoring pass completed at 2025-03-05T09:00:00+00:00" in line
    assert line.endswith("scoring_ms=1.25 records=42")


@pytest.mark.asyncio
async def test_health_and_metrics_endpoints():
    transport = ASGITransport(app=main.app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        health = await client.get("/api/health")
        live = await client.get("/api/health/live")
        ready = await client.get("/api/health/ready")
        metrics = await client.get("/api/metrics")

    assert health.status_code == 200
    assert health.json()["store_ready"] is True
    assert health.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in health.headers
    assert live.json()["status"] == "alive"
    assert ready.status_code == 200
    assert metrics.json()["metrics"]["requests_total"] >= 3
    assert "scoring" in metrics.json()["metrics"]


@pytest.mark.asyncio
async def test_health_reports_unparseable_clock_as_unpinned(monkeypatch):
    monkeypatch.setattr(main, "settings", Settings(REFERENCE_NOW="not-a-date"))
    transport = ASGITransport(app=main.app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        health = await client.get("/api/health")

    assert health.status_code == 200
    assert health.json()["clock_pinned"] is False

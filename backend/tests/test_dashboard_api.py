"""HTTP tests for the dashboard, incident and deadline routers."""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from backend.api.dashboard import router as dashboard_router
from backend.api.deadlines import router as deadlines_router
from backend.api import deps
from backend.api.deps import get_engine, get_store
from backend.api.incidents import router as incidents_router
from backend.config import Settings
from backend.scoring.engine import ScoringEngine
from backend.store.demo_data import DEMO_REFERENCE_NOW
from backend.store.memory import InMemoryRecordStore
from backend.utils.time import parse_instant, utc_now

AT = {"at": DEMO_REFERENCE_NOW}


@pytest.fixture
def scoring_app(demo_store: InMemoryRecordStore, engine: ScoringEngine):
    app = FastAPI()
    app.dependency_overrides[get_store] = lambda: demo_store
    app.dependency_overrides[get_engine] = lambda: engine
    app.include_router(dashboard_router)
    app.include_router(incidents_router)
    app.include_router(deadlines_router)
    return app


@pytest.mark.asyncio
async def test_dashboard_overview_is_one_consistent_pass(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/dashboard/overview", params=AT)

    assert resp.status_code == 200
    body = resp.json()
    assert body["evaluated_at"].startswith("2025-03-05T09:00:00")
    assert body["risk"]["overall_level"] == "Medium"
    assert body["risk"]["trend"] == "down"
    assert body["risk"]["urgent_count"] == body["risk"]["critical_count"] + body["risk"]["high_count"]
    assert body["compliance"]["overall_status"] == "Compliant"
    assert body["incident_stats"]["sla_breached"] == 1
    assert body["deadlines"]["overdue_count"] == 1
    assert body["lifecycle"]["document"]["records"][0]["status"] == "Expired"


@pytest.mark.asyncio
async def test_risk_snapshot_heat_map_keys(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/risk/snapshot")

    assert resp.status_code == 200
    body = resp.json()
    assert sum(cell["count"] for cell in body["heat_map"].values()) == body["total_count"]
    for key, cell in body["heat_map"].items():
        assert key == f"{cell['impact']}-{cell['likelihood']}"


@pytest.mark.asyncio
async def test_compliance_overview_flags_findings(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/compliance/overview")

    assert resp.status_code == 200
    frameworks = {f["name"]: f for f in resp.json()["frameworks"]}
    assert frameworks["EU AI Act"]["status"] == "Pending"
    assert frameworks["EU AI Act"]["score"] is None
    assert frameworks["PCI DSS"]["has_critical_findings"] is True
    assert frameworks["GDPR"]["has_critical_findings"] is False


@pytest.mark.asyncio
async def test_lifecycle_listing_and_unknown_kind(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        policies = await client.get("/api/lifecycle/policy", params=AT)
        unknown = await client.get("/api/lifecycle/contracts", params=AT)

    assert policies.status_code == 200
    body = policies.json()
    assert body["summary"]["kind"] == "policy"
    assert body["records"][0]["status"] == "Update Required"
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_incident_sla_listing(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/incidents/sla", params=AT)

    assert resp.status_code == 200
    states = {i["id"]: i["sla"]["state"] for i in resp.json()["incidents"]}
    assert states["INC-2025-0032"] == "breached"
    assert states["INC-2025-0033"] == "at-risk"
    assert states["INC-2025-0030"] == "met"
    assert states["INC-2025-0027"] == "on-track"


@pytest.mark.asyncio
async def test_advance_incident_endpoint(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resolved = await client.post(
            "/api/incidents/INC-2025-0032/advance", params=AT, json={"status": "Resolved"}
        )
        reopened = await client.post(
            "/api/incidents/INC-2025-0032/advance", params=AT, json={"status": "Open"}
        )
        missing = await client.post(
            "/api/incidents/INC-0000/advance", params=AT, json={"status": "Resolved"}
        )

    assert resolved.status_code == 200
    assert resolved.json()["status"] == "Resolved"
    assert resolved.json()["sla"]["state"] == "met"
    assert reopened.status_code == 409
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_deadline_queue_and_completion(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        before = await client.get("/api/deadlines", params=AT)
        completed = await client.post("/api/deadlines/dl-002/complete", params=AT)
        again = await client.post("/api/deadlines/dl-002/complete", params=AT)
        missing = await client.post("/api/deadlines/dl-404/complete", params=AT)
        after = await client.get("/api/deadlines", params=AT)

    assert before.status_code == 200
    assert before.json()["pending"][0]["id"] == "dl-002"
    assert before.json()["overdue_count"] == 1

    assert completed.status_code == 200
    assert completed.json()["deadline"]["completed"] is True
    assert completed.json()["deadline"]["overdue"] is False
    assert completed.json()["overdue_count"] == 0
    assert again.status_code == 200
    assert missing.status_code == 404

    assert after.json()["pending"][0]["id"] == "dl-005"
    assert len(after.json()["completed"]) == 2


@pytest.mark.asyncio
async def test_vendor_listing_by_risk(scoring_app):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        by_risk = await client.get("/api/lifecycle/vendor", params={**AT, "order": "risk"})
        bad_order = await client.get("/api/lifecycle/vendor", params={**AT, "order": "name"})

    assert by_risk.status_code == 200
    levels = [r["risk_level"] for r in by_risk.json()["records"]]
    assert levels[:2] == ["Critical", "High"]
    assert levels[-1] == "Unrecognized"
    assert bad_order.status_code == 422


@pytest.mark.asyncio
async def test_completion_stamped_with_request_instant(scoring_app, demo_store: InMemoryRecordStore):
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/deadlines/dl-003/complete", params=AT)

    assert resp.status_code == 200
    snapshot = await demo_store.fetch_snapshot()
    stored = next(d for d in snapshot.deadlines if d.id == "dl-003")
    assert stored.completed_at == parse_instant(DEMO_REFERENCE_NOW)


@pytest.mark.asyncio
async def test_unparseable_reference_now_falls_back_to_wall_clock(scoring_app, monkeypatch):
    monkeypatch.setattr(deps, "settings", Settings(REFERENCE_NOW="not-a-date"))
    transport = ASGITransport(app=scoring_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/deadlines")

    assert resp.status_code == 200
    evaluated_at = datetime.fromisoformat(resp.json()["evaluated_at"])
    assert abs((utc_now() - evaluated_at).total_seconds()) < 60

"""Derived dashboard views — risk, compliance posture and lifecycle listings."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from backend.api.deps import get_engine, get_now, get_store
from backend.models.lifecycle import LifecycleKind
from backend.scoring.compliance import ComplianceOverview
from backend.scoring.engine import LifecycleListing, ScoringEngine
from backend.scoring.risk import RiskSnapshot
from backend.store.base import RecordStore

router = APIRouter(prefix="/api", tags=["dashboard"])


def risk_payload(snapshot: RiskSnapshot) -> dict:
    payload = jsonable_encoder(snapshot)
    payload["urgent_count"] = snapshot.urgent_count
    return payload


def compliance_payload(overview: ComplianceOverview) -> dict:
    payload = jsonable_encoder(overview)
    for entry, view in zip(payload["frameworks"], overview.frameworks):
        entry["has_critical_findings"] = view.has_critical_findings
    return payload


def lifecycle_payload(listing: LifecycleListing) -> dict:
    return jsonable_encoder(listing)


@router.get("/dashboard/overview")
async def dashboard_overview(
    now: datetime = Depends(get_now),
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    """Every derived view from one snapshot at one instant."""
    snapshot = await store.fetch_snapshot()
    view = engine.score(snapshot, now)
    return {
        "evaluated_at": view.evaluated_at.isoformat(),
        "risk": risk_payload(view.risk),
        "incidents": jsonable_encoder(view.incidents),
        "incident_stats": jsonable_encoder(view.incident_stats),
        "compliance": compliance_payload(view.compliance),
        "lifecycle": {kind: lifecycle_payload(listing) for kind, listing in view.lifecycle.items()},
        "deadlines": jsonable_encoder(view.deadlines),
    }


@router.get("/risk/snapshot")
async def risk_snapshot(
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    snapshot = await store.fetch_snapshot()
    return risk_payload(engine.score_risk(snapshot))


@router.get("/compliance/overview")
async def compliance_overview(
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    snapshot = await store.fetch_snapshot()
    return compliance_payload(engine.score_compliance(snapshot))


@router.get("/lifecycle/{kind}")
async def lifecycle_listing(
    kind: str,
    order: Literal["status", "risk"] = Query("status"),
    now: datetime = Depends(get_now),
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    """Vendors, documents or policies with effective status, in listing order."""
    try:
        lifecycle_kind = LifecycleKind(kind.lower())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown record kind: {kind}")

    snapshot = await store.fetch_snapshot()
    listing = engine.score_lifecycle(snapshot, lifecycle_kind, now, by_risk=order == "risk")
    payload = lifecycle_payload(listing)
    payload["evaluated_at"] = now.isoformat()
    return payload

"""Incident SLA endpoints."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from backend.api.deps import get_engine, get_now, get_store
from backend.models.incident import IncidentAdvance
from backend.scoring.engine import ScoringEngine
from backend.scoring.sla import incident_views
from backend.store.base import InvalidTransitionError, RecordNotFoundError, RecordStore

router = APIRouter(prefix="/api/incidents", tags=["incidents"])


@router.get("/sla")
async def incident_sla(
    now: datetime = Depends(get_now),
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    """SLA percentage and state for every incident, plus roll-up stats."""
    snapshot = await store.fetch_snapshot()
    return {
        "evaluated_at": now.isoformat(),
        "incidents": jsonable_encoder(engine.score_incidents(snapshot, now)),
        "stats": jsonable_encoder(engine.incident_stats(snapshot, now)),
    }


@router.post("/{incident_id}/advance")
async def advance_incident(
    incident_id: str,
    data: IncidentAdvance,
    now: datetime = Depends(get_now),
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    """Move an incident forward in its lifecycle; terminal states are final."""
    try:
        incident = await store.advance_incident(incident_id, data.status, at=now)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    [view] = incident_views([incident], now, engine.at_risk_hours)
    return jsonable_encoder(view)

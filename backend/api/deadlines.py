"""Deadline queue endpoints."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from backend.api.deps import get_engine, get_now, get_store
from backend.scoring.deadlines import deadline_view
from backend.scoring.engine import ScoringEngine
from backend.store.base import RecordNotFoundError, RecordStore

router = APIRouter(prefix="/api/deadlines", tags=["deadlines"])


@router.get("")
async def list_deadlines(
    now: datetime = Depends(get_now),
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    """Pending deadlines soonest first, completed ones apart, with window counts."""
    snapshot = await store.fetch_snapshot()
    payload = jsonable_encoder(engine.score_deadlines(snapshot, now))
    payload["evaluated_at"] = now.isoformat()
    return payload


@router.post("/{deadline_id}/complete")
async def complete_deadline(
    deadline_id: str,
    now: datetime = Depends(get_now),
    store: RecordStore = Depends(get_store),
    engine: ScoringEngine = Depends(get_engine),
):
    try:
        item = await store.mark_complete(deadline_id, at=now)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    snapshot = await store.fetch_snapshot()
    queue = engine.score_deadlines(snapshot, now)
    return {
        "deadline": jsonable_encoder(deadline_view(item, now)),
        "overdue_count": queue.overdue_count,
        "pending_count": len(queue.pending),
    }

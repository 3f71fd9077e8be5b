"""Request-scoped dependencies: record store, scoring engine and the clock."""

from __future__ import annotations

from datetime import datetime

from fastapi import Query

from backend.config import settings
from backend.scoring.engine import ScoringEngine
from backend.store.base import RecordStore
from backend.store.memory import InMemoryRecordStore
from backend.utils.time import ensure_utc, utc_now

_store: RecordStore | None = None
_engine: ScoringEngine | None = None


def get_store() -> RecordStore:
    global _store
    if _store is None:
        _store = (
            InMemoryRecordStore.with_demo_data()
            if settings.enable_demo_data
            else InMemoryRecordStore()
        )
    return _store


def get_engine() -> ScoringEngine:
    global _engine
    if _engine is None:
        _engine = ScoringEngine(settings)
    return _engine


def get_now(
    at: datetime | None = Query(None, description="Evaluate views as of this ISO-8601 instant"),
) -> datetime:
    """The single ``now`` for a request: explicit ``at``, pinned clock, or wall clock."""
    if at is not None:
        return ensure_utc(at)
    try:
        pinned = settings.pinned_now
    except ValueError:
        # Already reported by the startup checks; run on the wall clock instead.
        pinned = None
    return pinned or utc_now()

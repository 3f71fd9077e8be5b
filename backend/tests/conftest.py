"""Shared test fixtures for ComplianceLens backend tests."""

from datetime import datetime

import pytest

from backend.config import Settings
from backend.observability.metrics import InMemoryMetrics
from backend.scoring.engine import ScoringEngine
from backend.store.demo_data import DEMO_REFERENCE_NOW
from backend.store.memory import InMemoryRecordStore
from backend.utils.time import parse_instant


@pytest.fixture
def now() -> datetime:
    """The instant the demo fixtures are written against (a Wednesday)."""
    return parse_instant(DEMO_REFERENCE_NOW)


@pytest.fixture
def demo_store() -> InMemoryRecordStore:
    return InMemoryRecordStore.with_demo_data()


@pytest.fixture
def registry() -> InMemoryMetrics:
    return InMemoryMetrics(latency_window=50)


@pytest.fixture
def engine(registry: InMemoryMetrics) -> ScoringEngine:
    return ScoringEngine(Settings(), registry=registry)

"""Shared fixtures for the Mauboussin analysis test suite."""

from __future__ import annotations

import datetime

import pytest

from mauboussin_analyzer.domain.aggregates import AnalysisRecord
from mauboussin_analyzer.domain.enums import DimensionKey
from mauboussin_analyzer.domain.values import AnalysisSnapshot
from mauboussin_analyzer.infrastructure.event_bus import EventBus, EventStore
from mauboussin_analyzer.services.session import AnalysisSession

REPORT_DATE = datetime.date(2024, 3, 15)


# ---------------------------------------------------------------------------
# Infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def event_store(event_bus: EventBus) -> EventStore:
    """Store attached to the shared ``event_bus`` fixture."""
    store = EventStore()
    store.attach(event_bus)
    return store


# ---------------------------------------------------------------------------
# Record fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def record(event_bus: EventBus) -> AnalysisRecord:
    """A fresh record publishing on ``event_bus``."""
    return AnalysisRecord(record_id="test-record", event_bus=event_bus)


@pytest.fixture
def acme_record() -> AnalysisRecord:
    """Record for "Acme" with scores 4, 3, 5, 2, 0 and one set of notes."""
    rec = AnalysisRecord(record_id="acme")
    rec.set_field("companyName", "Acme")
    rec.set_field("industry", "Industrial tools")
    for key, score in zip(DimensionKey, (4, 3, 5, 2, 0)):
        rec.set_dimension_score(key, score)
    rec.set_dimension_notes(DimensionKey.NETWORK_EFFECTS, "Dealer network")
    return rec


@pytest.fixture
def acme_snapshot(acme_record: AnalysisRecord) -> AnalysisSnapshot:
    return acme_record.snapshot()


@pytest.fixture
def blank_snapshot() -> AnalysisSnapshot:
    return AnalysisRecord().snapshot()


# ---------------------------------------------------------------------------
# Session fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def session(event_bus: EventBus) -> AnalysisSession:
    return AnalysisSession(event_bus=event_bus)


@pytest.fixture
def report_date() -> datetime.date:
    """Fixed generation date so reports compare byte for byte."""
    return REPORT_DATE

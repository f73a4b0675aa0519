"""Domain events for the Mauboussin analysis toolkit.

Every event is a frozen dataclass inheriting from ``DomainEvent``.  The
analysis record emits an event for each accepted mutation and the editing
session emits one per generated report; listeners (an edit log, a console,
autosave in a presentation layer) react without the record knowing about
them.

All events carry a ``timestamp`` and a ``source_id`` identifying the
originating record or session.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from .enums import DimensionKey, MoatClassification

# ---------------------------------------------------------------------------
# Base event
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events.

    Subclasses should remain frozen (immutable) and should *not* override
    ``__eq__`` or ``__hash__``.
    """

    timestamp: float = field(default_factory=time.time)
    source_id: str = ""


# ---------------------------------------------------------------------------
# Record mutation events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldUpdated(DomainEvent):
    """A scalar text or enum field was replaced."""

    field_name: str = ""
    old_value: Any = None
    new_value: Any = None


@dataclass(frozen=True)
class DimensionScoreChanged(DomainEvent):
    """A dimension's score was replaced."""

    key: DimensionKey | None = None
    old_score: int = 0
    new_score: int = 0


@dataclass(frozen=True)
class DimensionNotesChanged(DomainEvent):
    """A dimension's notes were replaced."""

    key: DimensionKey | None = None
    notes: str = ""


# ---------------------------------------------------------------------------
# Report events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportGenerated(DomainEvent):
    """A text report was produced from a snapshot."""

    company_name: str = ""
    classification: MoatClassification | None = None
    score: float = 0.0
    line_count: int = 0

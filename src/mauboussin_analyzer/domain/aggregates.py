"""Aggregate root for the Mauboussin analysis toolkit.

``AnalysisRecord`` enforces the questionnaire's shape.  External code should
only mutate an analysis through its setter methods, never by reaching into
the stored dimensions directly.  Each setter touches exactly one field;
derived values (the moat score and classification) are computed on read by
the services layer and never cached here.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Protocol

from .enums import DimensionKey, Trajectory
from .events import (
    DimensionNotesChanged,
    DimensionScoreChanged,
    DomainEvent,
    FieldUpdated,
)
from .exceptions import (
    InvalidEnumValue,
    InvalidFieldValue,
    ScoreOutOfRange,
    UnknownDimension,
    UnknownField,
)
from .questionnaire import ENUM_FIELDS, FIELD_SPECS, resolve_field_name
from .values import (
    AnalysisSnapshot,
    CompetitiveDimension,
    coerce_dimension_key,
)

logger = logging.getLogger(__name__)


class EventPublisher(Protocol):
    """Anything with a ``publish(event)`` method, e.g. ``EventBus``."""

    def publish(self, event: DomainEvent) -> None: ...


def _coerce_trajectory(value: Any) -> Trajectory:
    if isinstance(value, Trajectory):
        return value
    try:
        return Trajectory(value)
    except (ValueError, TypeError):
        raise InvalidEnumValue(
            "trajectory", value, allowed=[t.value for t in Trajectory]
        ) from None


# ---------------------------------------------------------------------------
# AnalysisRecord
# ---------------------------------------------------------------------------

class AnalysisRecord:
    """Aggregate root: the mutable, in-progress analysis of one company.

    Created with every text field empty, the conclusion's moat rating set to
    the literal ``"None"``, all five dimension scores at 0 and trajectory
    ``Stable``.  Mutations are serialized by an internal lock so a
    :meth:`snapshot` always reflects one point in time.

    Parameters
    ----------
    record_id:
        Identifier used as ``source_id`` on published events.
    event_bus:
        Optional publisher notified after every accepted mutation.
    """

    def __init__(
        self,
        record_id: str = "analysis",
        event_bus: EventPublisher | None = None,
    ) -> None:
        self.record_id = record_id
        self._event_bus = event_bus
        self._lock = threading.Lock()
        self._text: dict[str, str] = {
            spec.name: "" for spec in FIELD_SPECS if spec.name not in ENUM_FIELDS
        }
        self._text["moat_rating"] = "None"
        self._trajectory = Trajectory.STABLE
        self._dimensions: dict[DimensionKey, CompetitiveDimension] = {
            key: CompetitiveDimension(key=key) for key in DimensionKey
        }

    # -- properties -----------------------------------------------------------

    @property
    def trajectory(self) -> Trajectory:
        return self._trajectory

    @property
    def company_name(self) -> str:
        return self._text["company_name"]

    @property
    def moat_rating(self) -> str:
        """Free-text conclusion label; independent of the derived classification."""
        return self._text["moat_rating"]

    @property
    def dimensions(self) -> tuple[CompetitiveDimension, ...]:
        """The five dimensions in canonical order."""
        with self._lock:
            return tuple(self._dimensions[k] for k in DimensionKey)

    # -- queries --------------------------------------------------------------

    def get_field(self, field_name: str) -> Any:
        """Return a scalar field by attribute or camelCase name."""
        spec = resolve_field_name(field_name)
        if spec is None:
            raise UnknownField(field_name)
        if spec.name == "trajectory":
            return self._trajectory
        return self._text[spec.name]

    def dimension(self, key: DimensionKey | str) -> CompetitiveDimension:
        """Return the dimension stored under *key*."""
        return self._dimensions[coerce_dimension_key(key)]

    def snapshot(self) -> AnalysisSnapshot:
        """Immutable copy of the current state, taken atomically."""
        with self._lock:
            return AnalysisSnapshot(
                dimensions=tuple(self._dimensions[k] for k in DimensionKey),
                trajectory=self._trajectory,
                **self._text,
            )

    # -- mutations ------------------------------------------------------------

    def set_field(self, field_name: str, value: Any) -> None:
        """Replace one scalar text or enum field.

        Text fields accept any string verbatim.  ``trajectory`` accepts a
        ``Trajectory`` member or its exact value (``"Strengthening"``,
        ``"Stable"``, ``"Weakening"``) and raises ``InvalidEnumValue``
        otherwise.
        """
        spec = resolve_field_name(field_name)
        if spec is None:
            logger.warning("Rejected set_field: unknown field %r", field_name)
            raise UnknownField(field_name)

        if spec.name == "trajectory":
            try:
                new_value: Any = _coerce_trajectory(value)
            except InvalidEnumValue:
                logger.warning("Rejected trajectory value %r", value)
                raise
            with self._lock:
                old_value: Any = self._trajectory
                self._trajectory = new_value
        else:
            if not isinstance(value, str):
                logger.warning(
                    "Rejected set_field: %s expects str, got %s",
                    spec.name, type(value).__name__,
                )
                raise InvalidFieldValue(spec.name, value)
            new_value = value
            with self._lock:
                old_value = self._text[spec.name]
                self._text[spec.name] = new_value

        logger.debug("Set %s on %s", spec.name, self.record_id)
        self._publish(
            FieldUpdated(
                source_id=self.record_id,
                field_name=spec.name,
                old_value=old_value,
                new_value=new_value,
            )
        )

    def set_dimension_score(self, key: DimensionKey | str, score: int) -> None:
        """Replace one dimension's score, leaving its notes untouched.

        Raises ``UnknownDimension`` for a key outside the fixed five and
        ``ScoreOutOfRange`` unless *score* is an integer in [0, 5].
        """
        try:
            resolved = coerce_dimension_key(key)
        except UnknownDimension:
            logger.warning("Rejected score for unknown dimension %r", key)
            raise
        with self._lock:
            current = self._dimensions[resolved]
            try:
                updated = dataclasses.replace(current, score=score)
            except ScoreOutOfRange:
                logger.warning(
                    "Rejected score %r for %s", score, resolved.value
                )
                raise
            self._dimensions[resolved] = updated

        logger.debug(
            "Scored %s: %d -> %d", resolved.value, current.score, updated.score
        )
        self._publish(
            DimensionScoreChanged(
                source_id=self.record_id,
                key=resolved,
                old_score=current.score,
                new_score=updated.score,
            )
        )

    def set_dimension_notes(self, key: DimensionKey | str, notes: str) -> None:
        """Replace one dimension's notes verbatim (no trimming)."""
        try:
            resolved = coerce_dimension_key(key)
        except UnknownDimension:
            logger.warning("Rejected notes for unknown dimension %r", key)
            raise
        if not isinstance(notes, str):
            logger.warning(
                "Rejected notes for %s: expected str, got %s",
                resolved.value, type(notes).__name__,
            )
            raise InvalidFieldValue(f"{resolved.value}.notes", notes)
        with self._lock:
            self._dimensions[resolved] = dataclasses.replace(
                self._dimensions[resolved], notes=notes
            )

        logger.debug("Updated notes for %s", resolved.value)
        self._publish(
            DimensionNotesChanged(
                source_id=self.record_id, key=resolved, notes=notes
            )
        )

    # -- internal helpers -----------------------------------------------------

    def _publish(self, event: DomainEvent) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    def __repr__(self) -> str:
        return (
            f"AnalysisRecord(record_id={self.record_id!r}, "
            f"company_name={self.company_name!r}, "
            f"trajectory={self._trajectory.value!r})"
        )

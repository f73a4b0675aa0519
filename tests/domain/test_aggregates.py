"""Tests for the AnalysisRecord aggregate."""

from __future__ import annotations

import threading

import pytest

from mauboussin_analyzer.domain.aggregates import AnalysisRecord
from mauboussin_analyzer.domain.enums import DimensionKey, Trajectory
from mauboussin_analyzer.domain.events import (
    DimensionNotesChanged,
    DimensionScoreChanged,
    FieldUpdated,
)
from mauboussin_analyzer.domain.exceptions import (
    InvalidEnumValue,
    InvalidFieldValue,
    ScoreOutOfRange,
    UnknownDimension,
    UnknownField,
)
from mauboussin_analyzer.domain.questionnaire import FIELD_SPECS
from mauboussin_analyzer.infrastructure.event_bus import EventStore

# ===================================================================== #
#  Initial state                                                         #
# ===================================================================== #


class TestInitialState:
    """A fresh record has empty text, moat rating "None", zero scores."""

    def test_text_fields_empty(self, record: AnalysisRecord) -> None:
        for spec in FIELD_SPECS:
            if spec.name in ("trajectory", "moat_rating"):
                continue
            assert record.get_field(spec.name) == ""

    def test_moat_rating_is_literal_none(self, record: AnalysisRecord) -> None:
        assert record.moat_rating == "None"
        assert record.get_field("moatRating") == "None"

    def test_trajectory_stable(self, record: AnalysisRecord) -> None:
        assert record.trajectory is Trajectory.STABLE

    def test_five_unrated_dimensions_in_order(self, record: AnalysisRecord) -> None:
        dims = record.dimensions
        assert [d.key for d in dims] == list(DimensionKey)
        assert all(d.score == 0 and d.notes == "" for d in dims)

    def test_repr(self, record: AnalysisRecord) -> None:
        assert "test-record" in repr(record)
        assert "Stable" in repr(record)


# ===================================================================== #
#  set_field                                                             #
# ===================================================================== #


class TestSetField:
    """Tests for set_field on text and enumerated fields."""

    def test_snake_and_camel_names(self, record: AnalysisRecord) -> None:
        record.set_field("company_name", "Acme")
        assert record.company_name == "Acme"
        record.set_field("companyName", "Globex")
        assert record.get_field("company_name") == "Globex"

    def test_value_stored_verbatim(self, record: AnalysisRecord) -> None:
        record.set_field("keyRisks", "  leading and trailing\nspaces  ")
        assert record.get_field("keyRisks") == "  leading and trailing\nspaces  "

    def test_set_field_touches_only_named_field(self, record: AnalysisRecord) -> None:
        before = record.snapshot()
        record.set_field("industry", "Retail")
        after = record.snapshot()
        assert after.industry == "Retail"
        assert after.company_name == before.company_name
        assert after.dimensions == before.dimensions

    def test_moat_rating_free_text(self, record: AnalysisRecord) -> None:
        record.set_field("moatRating", "Wide Moat")
        assert record.moat_rating == "Wide Moat"

    def test_trajectory_from_string(self, record: AnalysisRecord) -> None:
        record.set_field("trajectory", "Weakening")
        assert record.trajectory is Trajectory.WEAKENING

    def test_trajectory_from_enum(self, record: AnalysisRecord) -> None:
        record.set_field("trajectory", Trajectory.STRENGTHENING)
        assert record.trajectory is Trajectory.STRENGTHENING

    @pytest.mark.parametrize("bad", ["Improving", "stable", "", None, 3])
    def test_invalid_trajectory_rejected(self, record: AnalysisRecord, bad: object) -> None:
        record.set_field("trajectory", "Weakening")
        with pytest.raises(InvalidEnumValue) as exc_info:
            record.set_field("trajectory", bad)
        assert exc_info.value.field_name == "trajectory"
        assert exc_info.value.allowed == ("Strengthening", "Stable", "Weakening")
        assert record.trajectory is Trajectory.WEAKENING

    def test_unknown_field_rejected(self, record: AnalysisRecord) -> None:
        before = record.snapshot()
        with pytest.raises(UnknownField):
            record.set_field("ticker", "ACME")
        assert record.snapshot() == before

    def test_dimension_key_is_not_a_field(self, record: AnalysisRecord) -> None:
        with pytest.raises(UnknownField):
            record.set_field("supplyScale", "5")
        assert record.dimension("supplyScale").score == 0

    def test_non_string_text_rejected(self, record: AnalysisRecord) -> None:
        record.set_field("industry", "Retail")
        with pytest.raises(InvalidFieldValue):
            record.set_field("industry", 42)
        assert record.get_field("industry") == "Retail"

    def test_get_unknown_field(self, record: AnalysisRecord) -> None:
        with pytest.raises(UnknownField):
            record.get_field("nope")


# ===================================================================== #
#  Dimension setters                                                     #
# ===================================================================== #


class TestDimensionSetters:
    """Tests for set_dimension_score and set_dimension_notes."""

    def test_score_by_enum_and_string(self, record: AnalysisRecord) -> None:
        record.set_dimension_score(DimensionKey.SUPPLY_SCALE, 4)
        record.set_dimension_score("switchingCosts", 2)
        assert record.dimension("supplyScale").score == 4
        assert record.dimension(DimensionKey.SWITCHING_COSTS).score == 2

    def test_score_leaves_notes(self, record: AnalysisRecord) -> None:
        record.set_dimension_notes("intangibles", "Brand")
        record.set_dimension_score("intangibles", 5)
        dim = record.dimension("intangibles")
        assert dim.score == 5
        assert dim.notes == "Brand"

    def test_notes_leave_score(self, record: AnalysisRecord) -> None:
        record.set_dimension_score("costAdvantages", 3)
        record.set_dimension_notes("costAdvantages", "Cheap inputs")
        dim = record.dimension("costAdvantages")
        assert dim.score == 3
        assert dim.notes == "Cheap inputs"

    def test_score_touches_one_dimension(self, record: AnalysisRecord) -> None:
        record.set_dimension_score("networkEffects", 5)
        scores = [d.score for d in record.dimensions]
        assert scores == [0, 5, 0, 0, 0]

    @pytest.mark.parametrize("score", [0, 1, 2, 3, 4, 5])
    def test_every_valid_score_accepted(self, record: AnalysisRecord, score: int) -> None:
        record.set_dimension_score("supplyScale", score)
        assert record.dimension("supplyScale").score == score

    @pytest.mark.parametrize("bad", [-1, 6, 2.5, "3", True, None])
    def test_out_of_range_rejected(self, record: AnalysisRecord, bad: object) -> None:
        record.set_dimension_score("supplyScale", 3)
        with pytest.raises(ScoreOutOfRange) as exc_info:
            record.set_dimension_score("supplyScale", bad)  # type: ignore[arg-type]
        assert exc_info.value.key == "supplyScale"
        assert record.dimension("supplyScale").score == 3

    @pytest.mark.parametrize("key", ["supply_scale", "SUPPLY_SCALE", "Network_Effects"])
    def test_only_camel_case_keys_accepted(self, record: AnalysisRecord, key: str) -> None:
        before = record.snapshot()
        with pytest.raises(UnknownDimension):
            record.set_dimension_score(key, 3)
        with pytest.raises(UnknownDimension):
            record.set_dimension_notes(key, "x")
        assert record.snapshot() == before

    def test_unknown_dimension_score(self, record: AnalysisRecord) -> None:
        before = record.snapshot()
        with pytest.raises(UnknownDimension):
            record.set_dimension_score("brandPower", 3)
        assert record.snapshot() == before

    def test_unknown_dimension_notes(self, record: AnalysisRecord) -> None:
        with pytest.raises(UnknownDimension):
            record.set_dimension_notes("brandPower", "x")

    def test_non_string_notes_rejected(self, record: AnalysisRecord) -> None:
        record.set_dimension_notes("supplyScale", "kept")
        with pytest.raises(InvalidFieldValue):
            record.set_dimension_notes("supplyScale", None)  # type: ignore[arg-type]
        assert record.dimension("supplyScale").notes == "kept"

    def test_notes_not_trimmed(self, record: AnalysisRecord) -> None:
        record.set_dimension_notes("supplyScale", "  ")
        assert record.dimension("supplyScale").notes == "  "


# ===================================================================== #
#  Snapshots                                                             #
# ===================================================================== #


class TestSnapshot:
    """Snapshots are immutable and detached from later edits."""

    def test_snapshot_detached(self, record: AnalysisRecord) -> None:
        record.set_field("companyName", "Acme")
        snap = record.snapshot()
        record.set_field("companyName", "Globex")
        record.set_dimension_score("supplyScale", 5)
        assert snap.company_name == "Acme"
        assert snap.dimension("supplyScale").score == 0

    def test_snapshot_frozen(self, record: AnalysisRecord) -> None:
        snap = record.snapshot()
        with pytest.raises(AttributeError):
            snap.company_name = "x"  # type: ignore[misc]

    def test_equal_snapshots_for_same_state(self, record: AnalysisRecord) -> None:
        record.set_field("industry", "Retail")
        assert record.snapshot() == record.snapshot()

    def test_concurrent_score_writes(self, record: AnalysisRecord) -> None:
        def worker(key: DimensionKey) -> None:
            for score in range(6):
                record.set_dimension_score(key, score)

        threads = [threading.Thread(target=worker, args=(k,)) for k in DimensionKey]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert record.snapshot().scores == (5, 5, 5, 5, 5)


# ===================================================================== #
#  Events                                                                #
# ===================================================================== #


class TestRecordEvents:
    """Accepted mutations publish events; rejected ones publish nothing."""

    def test_field_updated(self, record: AnalysisRecord, event_store: EventStore) -> None:
        record.set_field("companyName", "Acme")
        event = event_store.latest
        assert isinstance(event, FieldUpdated)
        assert event.source_id == "test-record"
        assert event.field_name == "company_name"
        assert event.old_value == ""
        assert event.new_value == "Acme"

    def test_trajectory_event_carries_enum(
        self, record: AnalysisRecord, event_store: EventStore
    ) -> None:
        record.set_field("trajectory", "Strengthening")
        event = event_store.latest
        assert isinstance(event, FieldUpdated)
        assert event.old_value is Trajectory.STABLE
        assert event.new_value is Trajectory.STRENGTHENING

    def test_score_changed(self, record: AnalysisRecord, event_store: EventStore) -> None:
        record.set_dimension_score("intangibles", 4)
        record.set_dimension_score("intangibles", 2)
        events = event_store.get_events(DimensionScoreChanged)
        assert [(e.old_score, e.new_score) for e in events] == [(0, 4), (4, 2)]
        assert all(e.key is DimensionKey.INTANGIBLES for e in events)

    def test_notes_changed(self, record: AnalysisRecord, event_store: EventStore) -> None:
        record.set_dimension_notes("supplyScale", "Scale")
        event = event_store.latest
        assert isinstance(event, DimensionNotesChanged)
        assert event.notes == "Scale"

    def test_rejections_publish_nothing(
        self, record: AnalysisRecord, event_store: EventStore
    ) -> None:
        with pytest.raises(ScoreOutOfRange):
            record.set_dimension_score("supplyScale", 9)
        with pytest.raises(InvalidEnumValue):
            record.set_field("trajectory", "Sideways")
        with pytest.raises(UnknownField):
            record.set_field("ticker", "X")
        assert len(event_store) == 0

    def test_record_without_bus(self) -> None:
        rec = AnalysisRecord()
        rec.set_field("companyName", "Quiet")
        assert rec.company_name == "Quiet"

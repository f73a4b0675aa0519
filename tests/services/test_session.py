"""Tests for the AnalysisSession editing facade."""

from __future__ import annotations

import datetime
import subprocess
import sys
from pathlib import Path

import pytest

from mauboussin_analyzer.domain.aggregates import AnalysisRecord
from mauboussin_analyzer.domain.enums import MoatClassification, Section, Trajectory
from mauboussin_analyzer.domain.events import (
    DimensionScoreChanged,
    FieldUpdated,
    ReportGenerated,
)
from mauboussin_analyzer.domain.exceptions import ScoreOutOfRange, UnknownDimension
from mauboussin_analyzer.infrastructure.config import ExportConfig, ReportConfig
from mauboussin_analyzer.infrastructure.event_bus import EventBus, EventStore
from mauboussin_analyzer.services.session import AnalysisSession


class TestSessionEdits:
    def test_setters_forward_to_record(self, session: AnalysisSession) -> None:
        session.set_field("companyName", "Acme")
        session.set_field("trajectory", "Strengthening")
        session.set_dimension_score("supplyScale", 4)
        session.set_dimension_notes("supplyScale", "Scale")
        snap = session.snapshot()
        assert snap.company_name == "Acme"
        assert snap.trajectory is Trajectory.STRENGTHENING
        assert snap.dimension("supplyScale").score == 4
        assert snap.dimension("supplyScale").notes == "Scale"

    def test_rejected_edit_leaves_state(self, session: AnalysisSession) -> None:
        session.set_dimension_score("switchingCosts", 2)
        before = session.snapshot()
        with pytest.raises(ScoreOutOfRange):
            session.set_dimension_score("switchingCosts", 6)
        with pytest.raises(UnknownDimension):
            session.set_dimension_score("moat", 1)
        assert session.snapshot() == before

    def test_apply_answers(self, session: AnalysisSession) -> None:
        session.apply_answers(
            {
                "companyName": "Acme",
                "intangibles": {"score": 5, "notes": "Brand"},
                "trajectory": "Weakening",
            }
        )
        snap = session.snapshot()
        assert snap.company_name == "Acme"
        assert snap.dimension("intangibles").score == 5
        assert snap.trajectory is Trajectory.WEAKENING

    def test_edits_published_on_session_bus(
        self, session: AnalysisSession, event_store: EventStore
    ) -> None:
        session.set_field("industry", "Retail")
        session.set_dimension_score("costAdvantages", 3)
        assert len(event_store.get_events(FieldUpdated)) == 1
        assert len(event_store.get_events(DimensionScoreChanged)) == 1

    def test_supplied_record_is_used(self) -> None:
        record = AnalysisRecord(record_id="given")
        record.set_field("companyName", "Given Co")
        session = AnalysisSession(record=record)
        assert session.record is record
        assert session.snapshot().company_name == "Given Co"


class TestSessionReads:
    def test_assessment_is_fresh(self, session: AnalysisSession) -> None:
        assert session.assessment().classification is MoatClassification.NONE
        for key in ("supplyScale", "networkEffects", "switchingCosts", "intangibles"):
            session.set_dimension_score(key, 5)
        assessment = session.assessment()
        assert assessment.score == pytest.approx(4.0)
        assert assessment.classification is MoatClassification.WIDE

    def test_progress(self, session: AnalysisSession) -> None:
        session.set_field("companyName", "Acme")
        assert session.progress()[Section.OVERVIEW] == (1, 3)

    def test_filename_default(self, session: AnalysisSession) -> None:
        assert session.filename() == "company_mauboussin_analysis.txt"

    def test_filename_from_company(self, session: AnalysisSession) -> None:
        session.set_field("companyName", "Acme")
        assert session.filename() == "Acme_mauboussin_analysis.txt"


class TestSessionOutput:
    def test_report_publishes_event(
        self,
        session: AnalysisSession,
        event_store: EventStore,
        report_date: datetime.date,
    ) -> None:
        session.set_field("companyName", "Acme")
        text = session.report(report_date)
        event = event_store.latest
        assert isinstance(event, ReportGenerated)
        assert event.company_name == "Acme"
        assert event.classification is MoatClassification.NONE
        assert event.line_count == len(text.split("\n"))

    def test_report_uses_config(self, report_date: datetime.date) -> None:
        session = AnalysisSession(report_config=ReportConfig(placeholder="TBD"))
        assert "Company: TBD" in session.report(report_date).split("\n")

    def test_report_is_snapshot_of_moment(
        self, session: AnalysisSession, report_date: datetime.date
    ) -> None:
        session.set_field("companyName", "Before")
        text = session.report(report_date)
        session.set_field("companyName", "After")
        assert "Company: Before" in text
        assert "Company: After" in session.report(report_date)

    def test_export_writes_file(
        self, session: AnalysisSession, tmp_path: Path, report_date: datetime.date
    ) -> None:
        session.set_field("companyName", "Acme")
        path = session.export(tmp_path, report_date)
        assert path == tmp_path / "Acme_mauboussin_analysis.txt"
        assert path.read_text(encoding="utf-8") == session.report(report_date)

    def test_export_publishes_event(self, tmp_path: Path) -> None:
        bus = EventBus()
        received: list[ReportGenerated] = []
        bus.subscribe(ReportGenerated, received.append)
        session = AnalysisSession(event_bus=bus)
        session.export(tmp_path)
        assert len(received) == 1
        assert received[0].company_name == ""

    def test_export_config_directory(self, tmp_path: Path) -> None:
        out_dir = tmp_path / "reports"
        session = AnalysisSession(
            export_config=ExportConfig(output_dir=str(out_dir), default_company="draft")
        )
        path = session.export()
        assert path == out_dir / "draft_mauboussin_analysis.txt"
        assert path.exists()


class TestSessionImports:
    """The session and the package root load without any plotting stack."""

    @pytest.mark.parametrize(
        "module", ["mauboussin_analyzer", "mauboussin_analyzer.services.session"]
    )
    def test_matplotlib_not_loaded(self, module: str) -> None:
        code = f"import sys, {module}; print('matplotlib' in sys.modules)"
        result = subprocess.run(
            [sys.executable, "-c", code], capture_output=True, text=True, check=True
        )
        assert result.stdout.strip() == "False"

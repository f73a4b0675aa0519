"""Editing session: the single owner of an analysis record.

``AnalysisSession`` is what a presentation layer talks to.  It forwards each
edit to the record's setters, produces reports from snapshots (never from the
live record), and publishes a ``ReportGenerated`` event for every report.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from mauboussin_analyzer.domain.aggregates import AnalysisRecord
from mauboussin_analyzer.domain.enums import DimensionKey, Section
from mauboussin_analyzer.domain.events import ReportGenerated
from mauboussin_analyzer.domain.questionnaire import section_progress
from mauboussin_analyzer.domain.values import AnalysisSnapshot, MoatAssessment
from mauboussin_analyzer.infrastructure.config import ExportConfig, ReportConfig
from mauboussin_analyzer.infrastructure.event_bus import EventBus
from mauboussin_analyzer.infrastructure.serialization import apply_answers
from mauboussin_analyzer.services.export import export_filename, export_text
from mauboussin_analyzer.services.moat import assess_moat
from mauboussin_analyzer.services.report import ReportGenerator

logger = logging.getLogger(__name__)


class AnalysisSession:
    """One editing session over one :class:`AnalysisRecord`.

    Parameters
    ----------
    record:
        Record to edit; a fresh one is created when omitted.  A supplied
        record keeps whatever event bus it was built with.
    event_bus:
        Bus for mutation and report events; a private one is created when
        omitted.
    report_config:
        Layout options for generated reports.
    export_config:
        Filename and directory options for :meth:`export`.
    """

    def __init__(
        self,
        record: AnalysisRecord | None = None,
        event_bus: EventBus | None = None,
        report_config: ReportConfig | None = None,
        export_config: ExportConfig | None = None,
    ) -> None:
        self.event_bus = event_bus if event_bus is not None else EventBus()
        if record is None:
            record = AnalysisRecord(event_bus=self.event_bus)
        self.record = record
        self._generator = ReportGenerator(config=report_config, assessor=assess_moat)
        self._export_config = export_config or ExportConfig()

    # -- edits ----------------------------------------------------------------

    def set_field(self, field_name: str, value: Any) -> None:
        self.record.set_field(field_name, value)

    def set_dimension_score(self, key: DimensionKey | str, score: int) -> None:
        self.record.set_dimension_score(key, score)

    def set_dimension_notes(self, key: DimensionKey | str, notes: str) -> None:
        self.record.set_dimension_notes(key, notes)

    def apply_answers(self, answers: Mapping[str, Any]) -> None:
        """Apply a nested answers mapping through the individual setters.

        Not transactional: the first invalid entry raises and the entries
        before it remain applied.
        """
        apply_answers(self.record, answers)

    # -- reads ----------------------------------------------------------------

    def snapshot(self) -> AnalysisSnapshot:
        return self.record.snapshot()

    def assessment(self) -> MoatAssessment:
        """Freshly derived moat score and classification."""
        return assess_moat(self.record.snapshot())

    def progress(self) -> dict[Section, tuple[int, int]]:
        return section_progress(self.record.snapshot())

    def filename(self) -> str:
        """Conventional export filename for the current company name."""
        return export_filename(self.record.snapshot(), self._export_config)

    # -- output ---------------------------------------------------------------

    def report(self, generated_on: datetime.date | None = None) -> str:
        """Generate the text report from a fresh snapshot."""
        snapshot = self.record.snapshot()
        text = self._generator.generate(snapshot, generated_on)
        self._announce(snapshot, text)
        return text

    def export(
        self,
        output_dir: str | Path | None = None,
        generated_on: datetime.date | None = None,
    ) -> Path:
        """Write the text report to disk and return its path."""
        snapshot = self.record.snapshot()
        path = export_text(
            snapshot,
            output_dir=output_dir,
            generator=self._generator,
            config=self._export_config,
            generated_on=generated_on,
        )
        self._announce(snapshot, path.read_text(encoding=self._export_config.encoding))
        return path

    def _announce(self, snapshot: AnalysisSnapshot, text: str) -> None:
        assessment = assess_moat(snapshot)
        self.event_bus.publish(
            ReportGenerated(
                source_id=self.record.record_id,
                company_name=snapshot.company_name,
                classification=assessment.classification,
                score=assessment.score,
                line_count=text.count("\n") + 1,
            )
        )

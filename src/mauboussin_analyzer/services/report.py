"""Plain-text report generation.

:func:`generate` serializes an :class:`AnalysisSnapshot` and its derived moat
assessment into one fixed-format document.  The output depends only on the
snapshot, the configuration and the generation date, and the date appears on
exactly one line (``Generated: ...``) so it can be masked when comparing
reports.

Layout, top to bottom: title, company overview, moat assessment with the five
dimension scores, expectations, probabilistic assessment, management,
conclusion, the principles checklist and the closing quotation.  Sections are
separated by a double rule; each heading is underlined by a single rule.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable

from mauboussin_analyzer.domain.enums import Section
from mauboussin_analyzer.domain.questionnaire import (
    CLOSING_QUOTE,
    DIMENSION_SPECS,
    PRINCIPLES_CHECKLIST,
    fields_in,
)
from mauboussin_analyzer.domain.values import AnalysisSnapshot, MoatAssessment
from mauboussin_analyzer.infrastructure.config import ReportConfig
from mauboussin_analyzer.services.moat import assess_moat

logger = logging.getLogger(__name__)

REPORT_TITLE = "MAUBOUSSIN COMPETITIVE ANALYSIS"
DATE_LINE_PREFIX = "Generated: "

SECTION_RULE_CHAR = "═"  # double horizontal
HEADING_RULE_CHAR = "─"  # single horizontal
CHECKBOX = "☐"

# Text sections rendered as "Label:" followed by the value on its own line.
_TEXT_SECTIONS: tuple[tuple[str, Section], ...] = (
    ("EXPECTATIONS ANALYSIS", Section.EXPECTATIONS),
    ("PROBABILISTIC ASSESSMENT", Section.PROBABILISTIC),
    ("MANAGEMENT & CAPITAL ALLOCATION", Section.MANAGEMENT),
    ("CONCLUSION", Section.CONCLUSION),
)

# The free-text moat rating is kept on the record but not printed.
_UNPRINTED_FIELDS = frozenset({"moat_rating", "trajectory"})

Assessor = Callable[[AnalysisSnapshot], MoatAssessment]


class ReportGenerator:
    """Render snapshots into the fixed plain-text report.

    Parameters
    ----------
    config:
        Layout options.  Defaults to :class:`ReportConfig` defaults.
    assessor:
        Moat-derivation helper; defaults to :func:`assess_moat`.
    """

    def __init__(
        self,
        config: ReportConfig | None = None,
        assessor: Assessor | None = None,
    ) -> None:
        self._config = config or ReportConfig()
        self._config.validate()
        self._assessor = assessor or assess_moat

    @property
    def config(self) -> ReportConfig:
        return self._config

    def generate(
        self,
        snapshot: AnalysisSnapshot,
        generated_on: datetime.date | None = None,
    ) -> str:
        """Return the full report for *snapshot*.

        *generated_on* defaults to today's date.
        """
        if generated_on is None:
            generated_on = datetime.date.today()
        assessment = self._assessor(snapshot)

        lines: list[str] = [
            REPORT_TITLE,
            DATE_LINE_PREFIX + generated_on.strftime(self._config.date_format),
        ]
        lines += self._section_break()
        lines += self._overview(snapshot)
        lines += self._section_break()
        lines += self._moat(snapshot, assessment)
        for title, section in _TEXT_SECTIONS:
            lines += self._section_break()
            lines += self._text_section(snapshot, title, section)
        lines += self._section_break()
        lines += self._checklist()
        lines += self._section_break()
        lines += list(CLOSING_QUOTE)

        text = "\n".join(lines).strip()
        logger.debug(
            "Generated report for %r (%d lines, %s %.1f)",
            snapshot.company_name, text.count("\n") + 1,
            assessment.label, assessment.score,
        )
        return text

    # -- sections -------------------------------------------------------------

    def _value(self, value: str) -> str:
        return value if value else self._config.placeholder

    def _section_break(self) -> list[str]:
        return ["", SECTION_RULE_CHAR * self._config.rule_width, ""]

    def _heading(self, title: str) -> list[str]:
        return [title, HEADING_RULE_CHAR * self._config.rule_width]

    def _overview(self, snapshot: AnalysisSnapshot) -> list[str]:
        lines = self._heading("COMPANY OVERVIEW")
        for spec in fields_in(Section.OVERVIEW):
            lines.append(f"{spec.label}: {self._value(snapshot.get(spec.name))}")
        return lines

    def _moat(
        self, snapshot: AnalysisSnapshot, assessment: MoatAssessment
    ) -> list[str]:
        lines = self._heading("COMPETITIVE MOAT ASSESSMENT")
        lines += [
            "",
            f"Overall Moat Rating: {assessment.label} "
            f"({assessment.formatted_score()}/5.0)",
            f"Trajectory: {snapshot.trajectory.value}",
            "",
            "Detailed Scores:",
        ]
        for index, spec in enumerate(DIMENSION_SPECS, start=1):
            dim = snapshot.dimension(spec.key)
            lines.append(f"{index}. {spec.name}: {dim.score}/5")
            if dim.has_notes:
                lines.append(f"   Notes: {dim.notes}")
            lines.append("")
        # trailing blank is supplied by the section break
        lines.pop()
        return lines

    def _text_section(
        self, snapshot: AnalysisSnapshot, title: str, section: Section
    ) -> list[str]:
        lines = self._heading(title)
        for spec in fields_in(section):
            if spec.name in _UNPRINTED_FIELDS:
                continue
            lines += ["", f"{spec.label}:", self._value(snapshot.get(spec.name))]
        return lines

    def _checklist(self) -> list[str]:
        lines = self._heading("MAUBOUSSIN PRINCIPLES CHECKLIST")
        lines += [f"{CHECKBOX} {item}" for item in PRINCIPLES_CHECKLIST]
        return lines


def generate(
    snapshot: AnalysisSnapshot,
    generated_on: datetime.date | None = None,
) -> str:
    """Module-level shortcut using a default :class:`ReportGenerator`."""
    return ReportGenerator().generate(snapshot, generated_on)

"""Rich-based console dashboard with a plain-text mode.

:class:`ConsoleDashboard` renders the moat assessment, questionnaire progress
and the dimension guide as ``rich`` tables.  Pass ``use_rich=False`` for
plain ``print()`` output (e.g. when piping to a file).
"""

from __future__ import annotations

import sys
from typing import Any

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table as RichTable

from mauboussin_analyzer.domain.enums import MoatClassification
from mauboussin_analyzer.domain.questionnaire import (
    DIMENSION_SPECS,
    SECTION_TITLES,
    section_progress,
)
from mauboussin_analyzer.domain.values import AnalysisSnapshot
from mauboussin_analyzer.services.moat import assess_moat

_CLASSIFICATION_COLOURS = {
    MoatClassification.WIDE: "green",
    MoatClassification.NARROW: "yellow",
    MoatClassification.NONE: "red",
}


def _stars(score: int) -> str:
    return "★" * score + "☆" * (5 - score)


class ConsoleDashboard:
    """Console presentation of an analysis snapshot.

    Parameters
    ----------
    use_rich:
        Render with ``rich`` (default) or fall back to plain ``print()``.
    file:
        Output stream.  Defaults to ``sys.stdout``.
    """

    def __init__(self, use_rich: bool = True, file: Any = None) -> None:
        self._file = file or sys.stdout
        self._use_rich = use_rich
        self._console = RichConsole(file=self._file) if use_rich else None

    # -- helpers -----------------------------------------------------------

    def _plain_print(self, *args: Any, **kwargs: Any) -> None:
        """Print to the configured output stream."""
        kwargs.setdefault("file", self._file)
        print(*args, **kwargs)

    # -- public API --------------------------------------------------------

    def print_assessment(self, snapshot: AnalysisSnapshot) -> None:
        """Print the derived moat rating and the five dimension scores."""
        if self._console is not None:
            self._print_assessment_rich(self._console, snapshot)
        else:
            self._print_assessment_plain(snapshot)

    def print_progress(self, snapshot: AnalysisSnapshot) -> None:
        """Print answered/total counts for each questionnaire section."""
        progress = section_progress(snapshot)
        if self._console is not None:
            table = RichTable(
                title="Questionnaire Progress",
                show_header=True,
                header_style="bold cyan",
            )
            table.add_column("Section", style="bold")
            table.add_column("Answered", justify="right")
            for section, (answered, total) in progress.items():
                colour = "green" if answered == total else "dim"
                table.add_row(
                    SECTION_TITLES[section],
                    f"[{colour}]{answered}/{total}[/{colour}]",
                )
            self._console.print(table)
        else:
            self._plain_print("Questionnaire Progress")
            for section, (answered, total) in progress.items():
                self._plain_print(f"  {SECTION_TITLES[section]:<24}{answered}/{total}")

    def print_dimension_guide(self) -> None:
        """Print each dimension's description and guiding questions."""
        for index, spec in enumerate(DIMENSION_SPECS, start=1):
            if self._console is not None:
                self._console.print(
                    f"[bold]{index}. {spec.name}[/bold] [dim]({spec.key.value})[/dim]"
                )
                self._console.print(f"   [italic]{spec.description}[/italic]")
            else:
                self._plain_print(f"{index}. {spec.name} ({spec.key.value})")
                self._plain_print(f"   {spec.description}")
            for question in spec.questions:
                if self._console is not None:
                    self._console.print(f"   • {question}")
                else:
                    self._plain_print(f"   - {question}")

    def print_report(self, text: str) -> None:
        """Echo a generated report verbatim."""
        if self._console is not None:
            self._console.print(text, markup=False, highlight=False)
        else:
            self._plain_print(text)

    # ======================================================================
    # Implementations
    # ======================================================================

    def _print_assessment_rich(
        self, console: RichConsole, snapshot: AnalysisSnapshot
    ) -> None:
        assessment = assess_moat(snapshot)
        colour = _CLASSIFICATION_COLOURS[assessment.classification]
        title = escape(snapshot.company_name) or "Unnamed company"

        table = RichTable(
            title=f"Moat Assessment: {title}",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("#", justify="right")
        table.add_column("Dimension", style="bold")
        table.add_column("Score", justify="center")
        table.add_column("Strength")
        table.add_column("Notes", justify="center")

        for index, spec in enumerate(DIMENSION_SPECS, start=1):
            dim = snapshot.dimension(spec.key)
            table.add_row(
                str(index),
                spec.name,
                f"{_stars(dim.score)} {dim.score}/5",
                dim.label.value if dim.is_rated else f"[dim]{dim.label.value}[/dim]",
                "✓" if dim.has_notes else "",
            )

        console.print()
        console.print(table)
        console.print(
            f"  Overall: [bold {colour}]{assessment.label}[/bold {colour}] "
            f"({assessment.formatted_score()}/5.0)  "
            f"Trajectory: {snapshot.trajectory.value}"
        )
        console.print()

    def _print_assessment_plain(self, snapshot: AnalysisSnapshot) -> None:
        assessment = assess_moat(snapshot)
        self._plain_print()
        self._plain_print(f"Moat Assessment: {snapshot.company_name or 'Unnamed company'}")
        for index, spec in enumerate(DIMENSION_SPECS, start=1):
            dim = snapshot.dimension(spec.key)
            marker = " *" if dim.has_notes else ""
            self._plain_print(
                f"  {index}. {spec.name:<20}{dim.score}/5  {dim.label.value}{marker}"
            )
        self._plain_print(
            f"  Overall: {assessment.label} ({assessment.formatted_score()}/5.0)  "
            f"Trajectory: {snapshot.trajectory.value}"
        )
        self._plain_print()

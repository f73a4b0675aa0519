"""Services layer: moat derivation, report generation and export, editing session."""

from mauboussin_analyzer.services.moat import (
    NARROW_MOAT_THRESHOLD,
    WIDE_MOAT_THRESHOLD,
    assess_moat,
    classify_moat,
    overall_score,
    strength_label,
)
from mauboussin_analyzer.services.report import ReportGenerator, generate
from mauboussin_analyzer.services.export import export_filename, export_text
from mauboussin_analyzer.services.session import AnalysisSession

__all__ = [
    "NARROW_MOAT_THRESHOLD",
    "WIDE_MOAT_THRESHOLD",
    "assess_moat",
    "classify_moat",
    "overall_score",
    "strength_label",
    "ReportGenerator",
    "generate",
    "export_filename",
    "export_text",
    "AnalysisSession",
]

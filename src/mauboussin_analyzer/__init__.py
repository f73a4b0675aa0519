"""Mauboussin Competitive Analysis toolkit.

Structured questionnaire for assessing a company's competitive moat,
expectations, probabilistic outlook and management, with a derived moat
score and a fixed-format plain-text report.
"""

__version__ = "0.1.0"

from mauboussin_analyzer.domain import AnalysisRecord, AnalysisSnapshot
from mauboussin_analyzer.services import AnalysisSession, assess_moat, generate

__all__ = [
    "AnalysisRecord",
    "AnalysisSession",
    "AnalysisSnapshot",
    "assess_moat",
    "generate",
]

"""Moat derivation: aggregate score and three-tier classification.

The overall moat score is the arithmetic mean of the five dimension scores,
unrated (zero) dimensions included, so an analysis with missing ratings is
pulled toward "No Moat".  Classification uses inclusive lower bounds:

*  score >= 4.0        -> Wide Moat
*  2.5 <= score < 4.0  -> Narrow Moat
*  score < 2.5         -> No Moat

Nothing here is stored; callers recompute whenever they need the value.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from mauboussin_analyzer.domain.aggregates import AnalysisRecord
from mauboussin_analyzer.domain.enums import MoatClassification, StrengthLabel
from mauboussin_analyzer.domain.values import AnalysisSnapshot, MoatAssessment

WIDE_MOAT_THRESHOLD = 4.0
NARROW_MOAT_THRESHOLD = 2.5


def overall_score(scores: Sequence[int]) -> float:
    """Arithmetic mean of *scores*, zeros included.

    Raises ``ValueError`` on an empty sequence.
    """
    if len(scores) == 0:
        raise ValueError("overall_score needs at least one dimension score")
    return float(np.mean(np.asarray(scores, dtype=float)))


def classify_moat(score: float) -> MoatClassification:
    """Map an overall score in [0, 5] to its classification.

    Boundary values resolve to the higher tier.
    """
    if score >= WIDE_MOAT_THRESHOLD:
        return MoatClassification.WIDE
    if score >= NARROW_MOAT_THRESHOLD:
        return MoatClassification.NARROW
    return MoatClassification.NONE


def strength_label(score: int) -> StrengthLabel:
    """Ordinal label for a single dimension score (0 = "Not rated")."""
    return StrengthLabel.for_score(score)


def assess_moat(source: AnalysisSnapshot | AnalysisRecord) -> MoatAssessment:
    """Compute the moat assessment for a snapshot or a live record.

    A live record is snapshotted first so the five scores are read together.
    """
    snapshot = source.snapshot() if isinstance(source, AnalysisRecord) else source
    score = overall_score(snapshot.scores)
    return MoatAssessment(score=score, classification=classify_moat(score))

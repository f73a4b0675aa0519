"""Value objects for the Mauboussin analysis toolkit.

All types here are frozen dataclasses -- immutable, compared by value.
They represent a single dimension rating, catalogue entries describing the
questionnaire, point-in-time snapshots of an analysis and the derived moat
assessment.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Any

from .enums import DimensionKey, MoatClassification, Section, StrengthLabel, Trajectory
from .exceptions import ScoreOutOfRange, UnknownDimension

MIN_SCORE = 0
MAX_SCORE = 5


def coerce_dimension_key(key: DimensionKey | str) -> DimensionKey:
    """Resolve *key* to a ``DimensionKey``.

    Accepts only the enum member or its exact camelCase value
    (``"supplyScale"``).  Raises ``UnknownDimension`` for anything else.
    """
    if isinstance(key, DimensionKey):
        return key
    if isinstance(key, str):
        try:
            return DimensionKey(key)
        except ValueError:
            pass
    raise UnknownDimension(key)


# ---------------------------------------------------------------------------
# CompetitiveDimension
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompetitiveDimension:
    """One of the five competitive-advantage dimensions.

    ``score`` is an integer in [0, 5] where 0 means "not rated" and 1-5 is
    an ordinal strength scale.  ``notes`` is free text and may be empty.
    """

    key: DimensionKey
    score: int = 0
    notes: str = ""

    def __post_init__(self) -> None:
        if (
            isinstance(self.score, bool)
            or not isinstance(self.score, numbers.Integral)
            or not MIN_SCORE <= self.score <= MAX_SCORE
        ):
            raise ScoreOutOfRange(self.key.value, self.score)
        # numpy integers and friends are stored as plain ``int``
        object.__setattr__(self, "score", int(self.score))

    @property
    def is_rated(self) -> bool:
        """True once the dimension has been given a score of 1 or more."""
        return self.score > 0

    @property
    def label(self) -> StrengthLabel:
        """Ordinal strength label for the current score."""
        return StrengthLabel.for_score(self.score)

    @property
    def has_notes(self) -> bool:
        return self.notes != ""


def default_dimensions() -> tuple[CompetitiveDimension, ...]:
    """Five unrated dimensions in canonical order."""
    return tuple(CompetitiveDimension(key=k) for k in DimensionKey)


# ---------------------------------------------------------------------------
# Catalogue entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DimensionSpec:
    """Static description of a dimension: display name and guiding questions."""

    key: DimensionKey
    name: str
    description: str = ""
    questions: tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldSpec:
    """Static description of a free-text or enumerated questionnaire field.

    ``name`` is the Python attribute name, ``camel_name`` the key used in
    answers files, ``label`` the caption printed in the report.
    """

    name: str
    camel_name: str
    label: str
    section: Section


# ---------------------------------------------------------------------------
# AnalysisSnapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisSnapshot:
    """Immutable, point-in-time copy of an ``AnalysisRecord``.

    Produced by :meth:`AnalysisRecord.snapshot` and consumed by the report
    generator, which therefore never observes a record mid-mutation.
    """

    # Company overview
    company_name: str = ""
    business_model: str = ""
    industry: str = ""

    # Moat assessment
    dimensions: tuple[CompetitiveDimension, ...] = field(
        default_factory=default_dimensions
    )
    trajectory: Trajectory = Trajectory.STABLE

    # Expectations
    current_valuation: str = ""
    implied_expectations: str = ""
    upward_triggers: str = ""
    downward_triggers: str = ""

    # Probabilistic assessment
    base_rate: str = ""
    outcome_range: str = ""
    skill_vs_luck: str = ""

    # Management
    capital_allocation: str = ""
    strategic_thinking: str = ""
    track_record: str = ""

    # Conclusion
    moat_rating: str = "None"
    investment_thesis: str = ""
    key_risks: str = ""
    what_would_change: str = ""

    def __post_init__(self) -> None:
        keys = tuple(d.key for d in self.dimensions)
        if keys != tuple(DimensionKey):
            raise ValueError(
                "dimensions must hold exactly the five fixed keys in order, "
                f"got {[k.value for k in keys]}"
            )

    def dimension(self, key: DimensionKey | str) -> CompetitiveDimension:
        """Return the dimension stored under *key*."""
        resolved = coerce_dimension_key(key)
        return self.dimensions[list(DimensionKey).index(resolved)]

    def get(self, field_name: str) -> Any:
        """Return a scalar field by attribute name."""
        return getattr(self, field_name)

    @property
    def scores(self) -> tuple[int, ...]:
        """The five scores in canonical order."""
        return tuple(d.score for d in self.dimensions)


# ---------------------------------------------------------------------------
# MoatAssessment
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoatAssessment:
    """Derived aggregate: mean of the five scores and its classification."""

    score: float
    classification: MoatClassification

    @property
    def label(self) -> str:
        return self.classification.value

    def formatted_score(self) -> str:
        """Score rendered to one decimal place, e.g. ``"2.8"``."""
        return f"{self.score:.1f}"

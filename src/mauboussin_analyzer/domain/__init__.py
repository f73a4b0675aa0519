"""Domain layer for the Mauboussin analysis toolkit.

Re-exports all public domain types so that consumers can write::

    from mauboussin_analyzer.domain import AnalysisRecord, DimensionKey
"""

# -- Enumerations -------------------------------------------------------------
from .enums import (
    DimensionKey,
    MoatClassification,
    Section,
    StrengthLabel,
    Trajectory,
)

# -- Value Objects ------------------------------------------------------------
from .values import (
    AnalysisSnapshot,
    CompetitiveDimension,
    DimensionSpec,
    FieldSpec,
    MoatAssessment,
)

# -- Aggregates ---------------------------------------------------------------
from .aggregates import AnalysisRecord

# -- Domain Events ------------------------------------------------------------
from .events import (
    DimensionNotesChanged,
    DimensionScoreChanged,
    DomainEvent,
    FieldUpdated,
    ReportGenerated,
)

# -- Exceptions ---------------------------------------------------------------
from .exceptions import (
    InvalidEnumValue,
    InvalidFieldValue,
    MauboussinAnalyzerError,
    ScoreOutOfRange,
    UnknownDimension,
    UnknownField,
)

__all__ = [
    # enums
    "DimensionKey",
    "MoatClassification",
    "Section",
    "StrengthLabel",
    "Trajectory",
    # values
    "AnalysisSnapshot",
    "CompetitiveDimension",
    "DimensionSpec",
    "FieldSpec",
    "MoatAssessment",
    # aggregates
    "AnalysisRecord",
    # events
    "DimensionNotesChanged",
    "DimensionScoreChanged",
    "DomainEvent",
    "FieldUpdated",
    "ReportGenerated",
    # exceptions
    "InvalidEnumValue",
    "InvalidFieldValue",
    "MauboussinAnalyzerError",
    "ScoreOutOfRange",
    "UnknownDimension",
    "UnknownField",
]

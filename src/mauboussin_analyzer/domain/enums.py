"""Domain enumerations for the Mauboussin analysis toolkit.

These enums capture the fixed vocabularies of the questionnaire: the five
competitive-advantage dimensions, moat trajectory, the derived moat
classification, the ordinal strength scale and the questionnaire sections.
"""

from __future__ import annotations

from enum import Enum


class DimensionKey(Enum):
    """The five fixed competitive-advantage dimensions.

    Declaration order is the canonical report order.
    """

    SUPPLY_SCALE = "supplyScale"
    NETWORK_EFFECTS = "networkEffects"
    SWITCHING_COSTS = "switchingCosts"
    INTANGIBLES = "intangibles"
    COST_ADVANTAGES = "costAdvantages"


class Trajectory(Enum):
    """Direction in which the moat is moving over time."""

    STRENGTHENING = "Strengthening"
    STABLE = "Stable"  # default
    WEAKENING = "Weakening"


class MoatClassification(Enum):
    """Three-tier classification derived from the overall moat score."""

    WIDE = "Wide Moat"
    NARROW = "Narrow Moat"
    NONE = "No Moat"


class StrengthLabel(Enum):
    """Ordinal label for a single dimension score."""

    NOT_RATED = "Not rated"  # score 0
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    MODERATE = "Moderate"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    @classmethod
    def for_score(cls, score: int) -> StrengthLabel:
        """Return the label for an integer score in [0, 5]."""
        return list(cls)[score]


class Section(Enum):
    """Logical questionnaire sections, in editing order."""

    OVERVIEW = "overview"
    MOAT = "moat"
    EXPECTATIONS = "expectations"
    PROBABILISTIC = "probabilistic"
    MANAGEMENT = "management"
    CONCLUSION = "conclusion"

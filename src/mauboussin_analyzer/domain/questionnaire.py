"""Static questionnaire catalogue.

Everything in this module is constant: display names and guiding questions
for the five moat dimensions, the labelled free-text fields grouped by
section, the principles checklist and the closing quotation.  The catalogue
is shared by the record (field lookup), the report generator (labels and
order) and the presentation layer.
"""

from __future__ import annotations

from collections.abc import Mapping

from .enums import DimensionKey, Section
from .values import AnalysisSnapshot, DimensionSpec, FieldSpec

# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

DIMENSION_SPECS: tuple[DimensionSpec, ...] = (
    DimensionSpec(
        key=DimensionKey.SUPPLY_SCALE,
        name="Supply-Side Scale",
        description="Cost advantages that increase with scale",
        questions=(
            "Does the company have fixed costs that spread across larger output?",
            "How does unit cost decline with volume?",
            "What is the minimum efficient scale in this industry?",
        ),
    ),
    DimensionSpec(
        key=DimensionKey.NETWORK_EFFECTS,
        name="Network Effects",
        description="Product becomes more valuable as more people use it",
        questions=(
            "Are there direct user-to-user network effects?",
            "Are there platform dynamics or indirect effects?",
            "How strong and sustainable are these effects?",
        ),
    ),
    DimensionSpec(
        key=DimensionKey.SWITCHING_COSTS,
        name="Switching Costs",
        description="What customers lose by switching",
        questions=(
            "Are there financial, procedural, or relational switching costs?",
            "How sticky is the customer relationship?",
            "What is customer lifetime value?",
        ),
    ),
    DimensionSpec(
        key=DimensionKey.INTANGIBLES,
        name="Intangible Assets",
        description="Brands, patents, culture, regulatory advantages",
        questions=(
            "Does the brand command pricing power?",
            "Are there proprietary technologies or IP?",
            "Is there a unique organizational capability?",
        ),
    ),
    DimensionSpec(
        key=DimensionKey.COST_ADVANTAGES,
        name="Cost Advantages",
        description="Structural cost advantages beyond scale",
        questions=(
            "Are there unique cost structure advantages?",
            "Does the business model enable lower costs?",
            "Are these advantages sustainable?",
        ),
    ),
)

_DIMENSION_INDEX: dict[DimensionKey, DimensionSpec] = {
    spec.key: spec for spec in DIMENSION_SPECS
}


def dimension_spec(key: DimensionKey) -> DimensionSpec:
    """Catalogue entry for *key*."""
    return _DIMENSION_INDEX[key]


# ---------------------------------------------------------------------------
# Sections and fields
# ---------------------------------------------------------------------------

SECTION_TITLES: Mapping[Section, str] = {
    Section.OVERVIEW: "Company Overview",
    Section.MOAT: "Competitive Moat",
    Section.EXPECTATIONS: "Expectations Analysis",
    Section.PROBABILISTIC: "Probabilistic View",
    Section.MANAGEMENT: "Management Quality",
    Section.CONCLUSION: "Conclusion",
}

# Report order within each section follows declaration order.
FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec("company_name", "companyName", "Company", Section.OVERVIEW),
    FieldSpec("business_model", "businessModel", "Business Model", Section.OVERVIEW),
    FieldSpec("industry", "industry", "Industry", Section.OVERVIEW),
    FieldSpec("trajectory", "trajectory", "Trajectory", Section.MOAT),
    FieldSpec("current_valuation", "currentValuation", "Current Valuation", Section.EXPECTATIONS),
    FieldSpec(
        "implied_expectations", "impliedExpectations", "Implied Expectations",
        Section.EXPECTATIONS,
    ),
    FieldSpec(
        "upward_triggers", "upwardTriggers", "Upward Revision Triggers",
        Section.EXPECTATIONS,
    ),
    FieldSpec(
        "downward_triggers", "downwardTriggers", "Downward Revision Triggers",
        Section.EXPECTATIONS,
    ),
    FieldSpec("base_rate", "baseRate", "Base Rate Analysis", Section.PROBABILISTIC),
    FieldSpec("outcome_range", "outcomeRange", "Range of Outcomes", Section.PROBABILISTIC),
    FieldSpec(
        "skill_vs_luck", "skillVsLuck", "Skill vs. Luck Assessment",
        Section.PROBABILISTIC,
    ),
    FieldSpec(
        "capital_allocation", "capitalAllocation", "Capital Allocation Track Record",
        Section.MANAGEMENT,
    ),
    FieldSpec(
        "strategic_thinking", "strategicThinking", "Strategic Thinking",
        Section.MANAGEMENT,
    ),
    FieldSpec("track_record", "trackRecord", "Overall Track Record", Section.MANAGEMENT),
    FieldSpec("moat_rating", "moatRating", "Moat Rating", Section.CONCLUSION),
    FieldSpec(
        "investment_thesis", "investmentThesis", "Investment Thesis",
        Section.CONCLUSION,
    ),
    FieldSpec("key_risks", "keyRisks", "Key Risks", Section.CONCLUSION),
    FieldSpec(
        "what_would_change", "whatWouldChange", "What Would Change the Thesis",
        Section.CONCLUSION,
    ),
)

# Fields holding enumerations rather than free text.
ENUM_FIELDS = frozenset({"trajectory"})

# Answered-ness of these is not tracked: they always carry a value.
_PREFILLED_FIELDS = frozenset({"trajectory", "moat_rating"})

_FIELDS_BY_NAME: dict[str, FieldSpec] = {}
for _spec in FIELD_SPECS:
    _FIELDS_BY_NAME[_spec.name] = _spec
    _FIELDS_BY_NAME[_spec.camel_name] = _spec
del _spec


def resolve_field_name(name: str) -> FieldSpec | None:
    """Look up a field by attribute name or camelCase key; ``None`` if absent."""
    if not isinstance(name, str):
        return None
    return _FIELDS_BY_NAME.get(name)


def fields_in(section: Section) -> tuple[FieldSpec, ...]:
    """Fields belonging to *section*, in report order."""
    return tuple(spec for spec in FIELD_SPECS if spec.section is section)


# ---------------------------------------------------------------------------
# Constant report content
# ---------------------------------------------------------------------------

PRINCIPLES_CHECKLIST: tuple[str, ...] = (
    "Competitive advantage assessed across multiple dimensions",
    "Current expectations reverse-engineered from valuation",
    "Probabilistic thinking applied (distributions, not point estimates)",
    "Base rates considered for outside view",
    "Skill vs. luck analysis conducted",
    "Management capital allocation evaluated",
    "Key risks and disconfirming evidence identified",
    "Clear thesis and what would change your mind",
)

CLOSING_QUOTE: tuple[str, ...] = (
    '"The big money is not in the buying or selling, but in the waiting."',
    "- Charlie Munger",
    "",
    "This analysis follows Michael Mauboussin's framework for competitive",
    "advantage assessment and expectations investing.",
)


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def section_progress(snapshot: AnalysisSnapshot) -> dict[Section, tuple[int, int]]:
    """Count answered items per section as ``(answered, total)``.

    A text field counts as answered when non-empty; a dimension counts when
    it has been rated.  Trajectory and the conclusion's moat rating always
    carry a value and are not counted.
    """
    progress: dict[Section, tuple[int, int]] = {}
    for section in Section:
        specs = [s for s in fields_in(section) if s.name not in _PREFILLED_FIELDS]
        answered = sum(1 for s in specs if snapshot.get(s.name) != "")
        total = len(specs)
        if section is Section.MOAT:
            answered += sum(1 for d in snapshot.dimensions if d.is_rated)
            total += len(snapshot.dimensions)
        progress[section] = (answered, total)
    return progress

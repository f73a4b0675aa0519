"""Serialization of analyses to and from plain dicts, JSON and YAML.

The dict shape mirrors the editor's answer sheet: camelCase keys for the
text fields and ``trajectory``, and one ``{"score": ..., "notes": ...}``
mapping per dimension key::

    {
        "companyName": "Acme",
        "supplyScale": {"score": 4, "notes": "..."},
        "trajectory": "Stable",
        ...
    }

Loading always goes through the record's validated setters, so a malformed
answers file raises the same domain errors an interactive edit would.
This is an interchange format for the command line, not a session store.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import yaml

from mauboussin_analyzer.domain.aggregates import AnalysisRecord, EventPublisher
from mauboussin_analyzer.domain.enums import DimensionKey
from mauboussin_analyzer.domain.exceptions import InvalidFieldValue
from mauboussin_analyzer.domain.questionnaire import FIELD_SPECS
from mauboussin_analyzer.domain.values import AnalysisSnapshot, MoatAssessment

logger = logging.getLogger(__name__)

# Derived values written alongside the answers; ignored on load.
DERIVED_KEYS = frozenset({"overallScore", "moatClassification"})


# =========================================================================== #
#  Dict conversion                                                             #
# =========================================================================== #

def snapshot_to_dict(
    snapshot: AnalysisSnapshot,
    assessment: MoatAssessment | None = None,
) -> dict[str, Any]:
    """Convert *snapshot* to a JSON-safe dict.

    When *assessment* is given, ``overallScore`` and ``moatClassification``
    are appended.
    """
    data: dict[str, Any] = {}
    for spec in FIELD_SPECS:
        value = snapshot.get(spec.name)
        data[spec.camel_name] = value.value if spec.name == "trajectory" else value
    for dim in snapshot.dimensions:
        data[dim.key.value] = {"score": dim.score, "notes": dim.notes}
    if assessment is not None:
        data["overallScore"] = round(assessment.score, 2)
        data["moatClassification"] = assessment.label
    return data


def apply_answers(record: AnalysisRecord, data: Mapping[str, Any]) -> None:
    """Apply an answers mapping to *record*, one setter call per entry.

    Entries are applied in mapping order; the first invalid entry raises and
    the entries before it stay applied.  A null value for a text field or for
    dimension notes (a blank ``industry:`` line in YAML) is applied as ``""``;
    null scores and a null trajectory are still rejected.
    """
    if not isinstance(data, Mapping):
        raise InvalidFieldValue("answers", data, message="answers must be a mapping")
    dimension_keys = {k.value for k in DimensionKey}
    for key, value in data.items():
        if key in DERIVED_KEYS:
            continue
        if key in dimension_keys:
            _apply_dimension(record, key, value)
        else:
            record.set_field(key, "" if value is None else value)


def _apply_dimension(record: AnalysisRecord, key: str, value: Any) -> None:
    if not isinstance(value, Mapping):
        raise InvalidFieldValue(
            key, value, message=f"{key} must be a mapping with score/notes"
        )
    if "score" in value:
        record.set_dimension_score(key, value["score"])
    if "notes" in value:
        notes = value["notes"]
        record.set_dimension_notes(key, "" if notes is None else notes)


def record_from_dict(
    data: Mapping[str, Any],
    record_id: str = "analysis",
    event_bus: EventPublisher | None = None,
) -> AnalysisRecord:
    """Build a fresh record from an answers mapping."""
    record = AnalysisRecord(record_id=record_id, event_bus=event_bus)
    apply_answers(record, data)
    logger.debug("Loaded %d answer entries into %s", len(data), record_id)
    return record


# =========================================================================== #
#  JSON helpers                                                                #
# =========================================================================== #

def to_json(
    snapshot: AnalysisSnapshot,
    assessment: MoatAssessment | None = None,
    *,
    indent: int | None = 2,
) -> str:
    """Serialize a snapshot to a JSON string."""
    return json.dumps(
        snapshot_to_dict(snapshot, assessment), indent=indent, ensure_ascii=False
    )


def from_json(json_str: str, record_id: str = "analysis") -> AnalysisRecord:
    """Build a record from a JSON answers document."""
    return record_from_dict(json.loads(json_str), record_id=record_id)


# =========================================================================== #
#  YAML helpers                                                                #
# =========================================================================== #

def to_yaml(
    snapshot: AnalysisSnapshot,
    assessment: MoatAssessment | None = None,
) -> str:
    """Serialize a snapshot to a YAML string."""
    return yaml.safe_dump(
        snapshot_to_dict(snapshot, assessment),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def from_yaml(yaml_str: str, record_id: str = "analysis") -> AnalysisRecord:
    """Build a record from a YAML answers document."""
    return record_from_dict(yaml.safe_load(yaml_str) or {}, record_id=record_id)

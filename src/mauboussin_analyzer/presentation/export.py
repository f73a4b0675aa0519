"""Export utilities for finished analyses.

JSON and YAML exports carry the raw answers plus the derived moat score for
downstream tooling.  The plain-text report writers live in
:mod:`mauboussin_analyzer.services.export` and are re-exported here.
"""

from __future__ import annotations

from pathlib import Path

from mauboussin_analyzer.domain.values import AnalysisSnapshot
from mauboussin_analyzer.infrastructure.serialization import to_json, to_yaml
from mauboussin_analyzer.services.export import export_filename, export_text
from mauboussin_analyzer.services.moat import assess_moat

__all__ = ["export_filename", "export_json", "export_text", "export_yaml"]


def export_json(snapshot: AnalysisSnapshot, path: str | Path) -> Path:
    """Write the answers and derived moat score of *snapshot* as JSON."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(to_json(snapshot, assess_moat(snapshot)), encoding="utf-8")
    return out


def export_yaml(snapshot: AnalysisSnapshot, path: str | Path) -> Path:
    """Write the answers and derived moat score of *snapshot* as YAML."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(to_yaml(snapshot, assess_moat(snapshot)), encoding="utf-8")
    return out

"""Matplotlib charts of a moat assessment.

All functions return ``matplotlib.figure.Figure`` objects so the caller
decides whether to ``show()``, ``savefig()``, or embed them.
"""

from __future__ import annotations

import math
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from mauboussin_analyzer.domain.questionnaire import DIMENSION_SPECS
from mauboussin_analyzer.domain.values import AnalysisSnapshot
from mauboussin_analyzer.services.moat import (
    NARROW_MOAT_THRESHOLD,
    WIDE_MOAT_THRESHOLD,
    assess_moat,
)

_BAR_COLOUR = "#2196F3"
_UNRATED_COLOUR = "#BDBDBD"


def plot_dimension_scores(snapshot: AnalysisSnapshot, title: str = "") -> Figure:
    """Horizontal bar chart of the five dimension scores.

    The overall score is drawn as a vertical line together with the Narrow
    and Wide moat thresholds.

    Parameters
    ----------
    snapshot:
        Analysis to plot.
    title:
        Optional title; defaults to the company name and classification.
    """
    assessment = assess_moat(snapshot)
    names = [spec.name for spec in DIMENSION_SPECS]
    scores = [snapshot.dimension(spec.key).score for spec in DIMENSION_SPECS]
    colours = [_BAR_COLOUR if s > 0 else _UNRATED_COLOUR for s in scores]

    fig, ax = plt.subplots(figsize=(8, 4))
    positions = list(range(len(names)))
    ax.barh(positions, scores, color=colours)
    ax.set_yticks(positions)
    ax.set_yticklabels(names)
    ax.invert_yaxis()  # first dimension on top

    ax.axvline(
        NARROW_MOAT_THRESHOLD, color="#FF9800", linestyle=":", label="Narrow moat"
    )
    ax.axvline(WIDE_MOAT_THRESHOLD, color="#4CAF50", linestyle=":", label="Wide moat")
    ax.axvline(
        assessment.score,
        color="#F44336",
        linewidth=2,
        label=f"Overall {assessment.formatted_score()}",
    )

    ax.set_xlim(0, 5)
    ax.set_xlabel("Score")
    company = snapshot.company_name or "Unnamed company"
    ax.set_title(title or f"{company}: {assessment.label}")
    ax.legend(loc="lower right", fontsize=8)
    ax.grid(True, axis="x", alpha=0.3)
    fig.tight_layout()
    return fig


def plot_moat_radar(snapshot: AnalysisSnapshot) -> Figure:
    """Radar chart with one axis per dimension, scaled 0-5."""
    names = [spec.name for spec in DIMENSION_SPECS]
    values = [float(snapshot.dimension(spec.key).score) for spec in DIMENSION_SPECS]

    angles = [i * 2 * math.pi / len(names) for i in range(len(names))]
    angles.append(angles[0])  # close the polygon
    values.append(values[0])

    fig, ax = plt.subplots(figsize=(6, 6), subplot_kw={"projection": "polar"})
    ax.plot(angles, values, linewidth=2, color=_BAR_COLOUR)
    ax.fill(angles, values, color=_BAR_COLOUR, alpha=0.15)
    ax.set_thetagrids([a * 180 / math.pi for a in angles[:-1]], names, fontsize=8)
    ax.set_ylim(0, 5)
    ax.set_title(snapshot.company_name or "Moat Profile", pad=20)
    fig.tight_layout()
    return fig


def save_plot(fig: Figure, path: str | Path, dpi: int = 150) -> Path:
    """Save *fig* to *path* (format from the suffix) and close it."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return out

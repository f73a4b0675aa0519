#!/usr/bin/env python3
"""Example 01: Basic end-to-end analysis session.

Demonstrates:
- Filling in an analysis through an AnalysisSession
- Watching edits and reports through an EventBus / EventStore
- Reading the derived moat assessment and section progress
- Rendering and exporting the plain-text report

Run:
    PYTHONPATH=src python examples/01_basic_analysis.py
"""

from __future__ import annotations

import tempfile

from mauboussin_analyzer.domain.enums import DimensionKey
from mauboussin_analyzer.domain.events import ReportGenerated
from mauboussin_analyzer.domain.exceptions import ScoreOutOfRange
from mauboussin_analyzer.infrastructure.event_bus import EventBus, EventStore
from mauboussin_analyzer.presentation.console import ConsoleDashboard
from mauboussin_analyzer.services.session import AnalysisSession


def main() -> None:
    # -- Wiring ---------------------------------------------------------------
    bus = EventBus()
    store = EventStore()
    store.attach(bus)
    session = AnalysisSession(event_bus=bus)

    # -- Overview -------------------------------------------------------------
    session.set_field("companyName", "Acme")
    session.set_field("businessModel", "Sells industrial tools through dealers")
    session.set_field("industry", "Industrial tools")

    # -- Moat -----------------------------------------------------------------
    scores = {
        DimensionKey.SUPPLY_SCALE: 4,
        DimensionKey.NETWORK_EFFECTS: 3,
        DimensionKey.SWITCHING_COSTS: 5,
        DimensionKey.INTANGIBLES: 2,
    }
    for key, score in scores.items():
        session.set_dimension_score(key, score)
    session.set_dimension_notes(DimensionKey.SUPPLY_SCALE, "strong economies of scale")
    session.set_field("trajectory", "Strengthening")

    try:
        session.set_dimension_score(DimensionKey.COST_ADVANTAGES, 6)
    except ScoreOutOfRange as exc:
        print(f"Rejected: {exc}")

    # -- Conclusion -----------------------------------------------------------
    session.set_field("investmentThesis", "Dealer lock-in protects margins")
    session.set_field("keyRisks", "Direct-to-customer entrants")

    dashboard = ConsoleDashboard(use_rich=False)
    dashboard.print_assessment(session.snapshot())
    dashboard.print_progress(session.snapshot())

    print()
    print(session.report())
    print()

    with tempfile.TemporaryDirectory() as out_dir:
        path = session.export(out_dir)
        print(f"Exported to: {path.name}")

    print(f"Events recorded: {len(store)}")
    print(f"Reports generated: {len(store.get_events(ReportGenerated))}")
    print()
    print("Done.")


if __name__ == "__main__":
    main()

"""Presentation layer for the Mauboussin analysis toolkit.

Provides console output, plotting, and export utilities for analyses.

Public API
----------
- :class:`ConsoleDashboard` -- rich console tables (or plain text)
- :func:`plot_dimension_scores`, :func:`plot_moat_radar`, :func:`save_plot`
  -- matplotlib charts
- :func:`export_filename`, :func:`export_text`, :func:`export_json`,
  :func:`export_yaml` -- file export
"""

from mauboussin_analyzer.presentation.console import ConsoleDashboard
from mauboussin_analyzer.presentation.export import (
    export_filename,
    export_json,
    export_text,
    export_yaml,
)
from mauboussin_analyzer.presentation.plots import (
    plot_dimension_scores,
    plot_moat_radar,
    save_plot,
)

__all__ = [
    # Console
    "ConsoleDashboard",
    # Plots
    "plot_dimension_scores",
    "plot_moat_radar",
    "save_plot",
    # Export
    "export_filename",
    "export_text",
    "export_json",
    "export_yaml",
]

"""Report file naming and writing.

The plain-text report is written under the conventional name
``<company>_mauboussin_analysis.txt`` (``company`` when no name was entered).
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

from mauboussin_analyzer.domain.values import AnalysisSnapshot
from mauboussin_analyzer.infrastructure.config import ExportConfig
from mauboussin_analyzer.services.report import ReportGenerator

logger = logging.getLogger(__name__)

_PATH_SEPARATORS = ("/", "\\")


def export_filename(
    source: AnalysisSnapshot | str,
    config: ExportConfig | None = None,
) -> str:
    """Conventional report filename for a snapshot or a bare company name.

    An empty company name is replaced by ``config.default_company``; path
    separators inside the name become underscores.
    """
    cfg = config or ExportConfig()
    name = source if isinstance(source, str) else source.company_name
    stem = name or cfg.default_company
    for sep in _PATH_SEPARATORS:
        stem = stem.replace(sep, "_")
    return f"{stem}{cfg.suffix}"


def export_text(
    snapshot: AnalysisSnapshot,
    output_dir: str | Path | None = None,
    generator: ReportGenerator | None = None,
    config: ExportConfig | None = None,
    generated_on: datetime.date | None = None,
) -> Path:
    """Write the text report for *snapshot* and return its path.

    Parameters
    ----------
    snapshot:
        The analysis to render.
    output_dir:
        Target directory; defaults to ``config.output_dir``.  Created if
        missing.
    generator:
        Report generator to use; a default one is created if omitted.
    config:
        Export options.
    generated_on:
        Date for the report's ``Generated:`` line (defaults to today).
    """
    cfg = config or ExportConfig()
    gen = generator or ReportGenerator()
    out_dir = Path(output_dir if output_dir is not None else cfg.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    out = out_dir / export_filename(snapshot, cfg)
    out.write_text(gen.generate(snapshot, generated_on), encoding=cfg.encoding)
    logger.info("Exported report to %s", out)
    return out

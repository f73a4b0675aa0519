"""Command-line interface for the Mauboussin analysis toolkit.

Provides subcommands for writing an empty answers file, rendering the text
report from a filled-in one, showing the moat assessment, and listing the
questionnaire catalogue.  The presentation layer (rich, matplotlib) is
imported lazily by the subcommands that print to the console.

Entry point
-----------
The ``main()`` function is registered as a console script in
``pyproject.toml``::

    [project.scripts]
    mauboussin-analyzer = "mauboussin_analyzer.cli:main"

Usage examples::

    mauboussin-analyzer template --format yaml --output acme.yaml
    mauboussin-analyzer report --input acme.yaml --output ./reports
    mauboussin-analyzer assess --input acme.yaml --plot acme.png
    mauboussin-analyzer info
"""

from __future__ import annotations

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from mauboussin_analyzer.domain.exceptions import MauboussinAnalyzerError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="mauboussin-analyzer",
        description=(
            "Mauboussin Competitive Analysis -- score a company's moat and "
            "render the analysis report."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=False,
        help="Show version and exit.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available subcommands")

    # -- template ----------------------------------------------------------
    template_parser = subparsers.add_parser(
        "template",
        help="Write an empty answers file.",
        description="Emit a blank answers document to fill in.",
    )
    template_parser.add_argument(
        "--format",
        type=str,
        default="yaml",
        choices=["json", "yaml"],
        help="Answers file format. (default: yaml)",
    )
    template_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="File to write.  If omitted, prints to stdout.",
    )

    # -- report ------------------------------------------------------------
    report_parser = subparsers.add_parser(
        "report",
        help="Render the text report from an answers file.",
        description="Load an answers file and produce the analysis report.",
    )
    report_parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Path to the JSON or YAML answers file.",
    )
    report_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help=(
            "Directory to write <company>_mauboussin_analysis.txt into.  "
            "If omitted, prints to stdout."
        ),
    )
    report_parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Date for the 'Generated:' line, as YYYY-MM-DD. (default: today)",
    )
    report_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON or YAML file with 'report' and 'export' settings.",
    )

    # -- assess ------------------------------------------------------------
    assess_parser = subparsers.add_parser(
        "assess",
        help="Show the moat assessment and questionnaire progress.",
        description="Display dimension scores, the derived moat rating and progress.",
    )
    assess_parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Path to the JSON or YAML answers file.",
    )
    assess_parser.add_argument(
        "--plain",
        action="store_true",
        default=False,
        help="Plain-text output instead of rich tables.",
    )
    assess_parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Also save a bar chart of the dimension scores to this path.",
    )

    # -- info --------------------------------------------------------------
    subparsers.add_parser(
        "info",
        help="Show version and the questionnaire catalogue.",
        description="Display version, dimensions with guiding questions, and sections.",
    )

    return parser


# =========================================================================
# Helpers
# =========================================================================

def _read_text(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(f"file not found: {path}")
    return path.read_text(encoding="utf-8")


def _load_record(path_str: str) -> Any:
    from mauboussin_analyzer.infrastructure.serialization import from_json, from_yaml

    path = Path(path_str)
    text = _read_text(path)
    if path.suffix.lower() in _YAML_SUFFIXES:
        return from_yaml(text, record_id=path.stem)
    return from_json(text, record_id=path.stem)


def _load_configs(path_str: str | None) -> dict[str, Any]:
    from mauboussin_analyzer.infrastructure.config import (
        load_config_from_json,
        load_config_from_yaml,
    )

    if path_str is None:
        return {}
    path = Path(path_str)
    text = _read_text(path)
    if path.suffix.lower() in _YAML_SUFFIXES:
        return load_config_from_yaml(text)
    return load_config_from_json(text)


# =========================================================================
# Subcommand handlers
# =========================================================================

def _cmd_template(args: argparse.Namespace) -> int:
    """Handle the ``template`` subcommand."""
    from mauboussin_analyzer.domain.values import AnalysisSnapshot
    from mauboussin_analyzer.infrastructure.serialization import to_json, to_yaml

    blank = AnalysisSnapshot()
    text = to_yaml(blank) if args.format == "yaml" else to_json(blank) + "\n"

    if args.output is None:
        sys.stdout.write(text)
        return 0

    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    print(f"Wrote answers template to {out}")
    return 0


def _cmd_report(args: argparse.Namespace) -> int:
    """Handle the ``report`` subcommand."""
    from mauboussin_analyzer.services.session import AnalysisSession

    generated_on = None
    if args.date is not None:
        try:
            generated_on = datetime.date.fromisoformat(args.date)
        except ValueError:
            print(f"Error: invalid --date {args.date!r}, expected YYYY-MM-DD",
                  file=sys.stderr)
            return 1

    configs = _load_configs(args.config)
    session = AnalysisSession(
        record=_load_record(args.input),
        report_config=configs.get("report"),
        export_config=configs.get("export"),
    )

    if args.output is None:
        print(session.report(generated_on))
        return 0

    path = session.export(args.output, generated_on)
    print(f"Exported report to {path}")
    return 0


def _cmd_assess(args: argparse.Namespace) -> int:
    """Handle the ``assess`` subcommand."""
    from mauboussin_analyzer.presentation.console import ConsoleDashboard

    snapshot = _load_record(args.input).snapshot()
    dashboard = ConsoleDashboard(use_rich=not args.plain)
    dashboard.print_assessment(snapshot)
    dashboard.print_progress(snapshot)

    if args.plot is not None:
        from mauboussin_analyzer.presentation.plots import (
            plot_dimension_scores,
            save_plot,
        )

        path = save_plot(plot_dimension_scores(snapshot), args.plot)
        print(f"Saved chart to {path}")
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    """Handle the ``info`` subcommand."""
    from mauboussin_analyzer import __version__
    from mauboussin_analyzer.domain.questionnaire import SECTION_TITLES, fields_in
    from mauboussin_analyzer.presentation.console import ConsoleDashboard

    print(f"Mauboussin Competitive Analysis v{__version__}")
    print()
    print("Moat Dimensions:")
    ConsoleDashboard(use_rich=False).print_dimension_guide()
    print()
    print("Sections:")
    for section, title in SECTION_TITLES.items():
        names = ", ".join(spec.camel_name for spec in fields_in(section))
        print(f"  {title}: {names or '(dimension scores)'}")
    return 0


# =========================================================================
# Main entry point
# =========================================================================

def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from mauboussin_analyzer import __version__
        print(f"mauboussin-analyzer {__version__}")
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    handlers: dict[str, Any] = {
        "template": _cmd_template,
        "report": _cmd_report,
        "assess": _cmd_assess,
        "info": _cmd_info,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        exit_code = 130
    except (MauboussinAnalyzerError, OSError, ValueError, yaml.YAMLError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)

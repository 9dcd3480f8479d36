"""Command-line entry point for the survey analysis report.

Usage::

    python -m survey_analytics.main responses.csv -o reports/analysis.pdf
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from survey_analytics.app import configure_logging, generate_analysis_report, logger
from survey_analytics.exceptions import InputError, RenderError
from survey_analytics.reporting.render import render_summary

EXIT_INPUT_ERROR = 2
EXIT_RENDER_ERROR = 3


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze exported survey responses and render a PDF report."
    )
    parser.add_argument("csv", help="Exported survey responses (CSV)")
    parser.add_argument(
        "-o", "--output", default=None, help="PDF destination (default from REPORT_OUTPUT_DIR)"
    )
    parser.add_argument(
        "--summary", action="store_true", help="Also print a Markdown summary"
    )
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the pipeline and return a process exit code."""

    args = _parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        report = generate_analysis_report(args.csv, args.output)
    except InputError as exc:
        logger.error("No data to analyze: %s", exc)
        return EXIT_INPUT_ERROR
    except RenderError as exc:
        logger.error("Could not produce report: %s", exc)
        return EXIT_RENDER_ERROR

    if args.summary:
        print(render_summary(report.result))
    print(report.pdf_path)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

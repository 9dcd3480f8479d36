"""Survey analysis pipeline: load responses, aggregate, render the report.

This is the core behind the ``/api/responses/analysis`` endpoint of the
survey backend. HTTP routing, authentication and storage live outside this
package; they hand over an exported responses CSV (or rows already in
memory) and receive the report path plus the structured statistics.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from survey_analytics.exceptions import InputError, RenderError
from survey_analytics.reporting.aggregator import AnalysisBuilder
from survey_analytics.reporting.models import AnalysisResult
from survey_analytics.reporting.render import render_report
from survey_analytics.responses import ResponseRow, load_responses

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for command-line and service entry points."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=(level or os.environ.get("SURVEY_LOG_LEVEL", "INFO")).upper(),
    )


@dataclass(frozen=True)
class AnalysisReport:
    """Outcome of one pipeline run."""

    result: AnalysisResult
    pdf_path: Path


def analyze_rows(rows: Iterable[ResponseRow]) -> AnalysisResult:
    """Aggregate *rows*; raises :class:`InputError` when there are none."""
    result = AnalysisBuilder().add_all(rows).finalize()
    if result.is_empty:
        raise InputError("No survey responses to analyze")
    return result


def report_from_rows(
    rows: Iterable[ResponseRow],
    output_path: Optional[Union[str, Path]] = None,
    *,
    title: Optional[str] = None,
) -> AnalysisReport:
    """Analyze in-memory *rows* and write the PDF report."""

    result = analyze_rows(rows)
    try:
        pdf_path = render_report(result, output_path, title=title)
    except RenderError as exc:
        exc.result = result
        raise
    return AnalysisReport(result=result, pdf_path=pdf_path)


def generate_analysis_report(
    csv_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    *,
    title: Optional[str] = None,
) -> AnalysisReport:
    """Run the full pipeline over an exported responses CSV.

    Raises :class:`InputError` when there is nothing to analyze and
    :class:`RenderError` when the report cannot be written.
    """

    logger.info("Generating survey analysis from %s", csv_path)
    return report_from_rows(load_responses(csv_path), output_path, title=title)

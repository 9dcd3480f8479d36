"""Render survey analysis reports as PDF documents and Markdown summaries."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Optional, Union
from xml.sax.saxutils import escape

from jinja2 import Environment, FileSystemLoader
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from survey_analytics.exceptions import RenderError
from survey_analytics.reporting import config
from survey_analytics.reporting.charts import satisfaction_pie_png
from survey_analytics.reporting.context import (
    DepartmentSection,
    ReportContext,
    build_report_context,
)
from survey_analytics.reporting.models import AnalysisResult

logger = logging.getLogger(__name__)

__all__ = ["build_pdf", "render_report", "render_summary", "default_output_path"]

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Markdown output; HTML escaping would mangle answer text.
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)

_CHART_MAX_WIDTH = 6 * inch

# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def _styles():
    styles = getSampleStyleSheet()
    styles.add(
        ParagraphStyle(
            name="ReportTitle",
            parent=styles["Title"],
            fontSize=24,
            leading=30,
            alignment=TA_CENTER,
        )
    )
    styles.add(
        ParagraphStyle(
            name="ReportSubtitle",
            parent=styles["Normal"],
            fontSize=14,
            leading=18,
            alignment=TA_CENTER,
            textColor=colors.HexColor("#4a4a4a"),
        )
    )
    return styles


def _para(text: str, style) -> Paragraph:
    return Paragraph(escape(text), style)


def _title_page(ctx: ReportContext, styles) -> List:
    return [
        Spacer(1, 2 * inch),
        _para(ctx.title, styles["ReportTitle"]),
        Spacer(1, 0.3 * inch),
        _para("Employee survey responses by department", styles["ReportSubtitle"]),
        PageBreak(),
    ]


def _overview(ctx: ReportContext, styles) -> List:
    story: List = [_para("Overview", styles["Heading1"])]
    story.extend(_para(line, styles["BodyText"]) for line in ctx.overview_lines)
    story.append(Spacer(1, 0.4 * inch))
    return story


def _department(section: DepartmentSection, styles) -> List:
    body = styles["BodyText"]
    story: List = [
        _para(f"Department: {section.name}", styles["Heading2"]),
        _para(f"Total Responses: {section.total_responses}", body),
        _para(
            f"Satisfaction: {section.satisfaction}% | "
            f"Dissatisfaction: {section.dissatisfaction}%",
            body,
        ),
        Spacer(1, 0.15 * inch),
    ]
    for block in section.questions:
        story.append(_para(block.heading, styles["Heading3"]))
        if block.heading_line:
            story.append(_para(block.heading_line, body))
        story.extend(_para(line, body) for line in block.lines)
        story.append(_para(block.total_line, body))
        story.append(Spacer(1, 0.25 * inch))

    story.append(_para("-" * 40, body))
    story.append(Spacer(1, 0.3 * inch))
    return story


def _distribution_page(ctx: ReportContext, styles) -> List:
    story: List = [
        PageBreak(),
        _para("Satisfaction Distribution", styles["ReportSubtitle"]),
        Spacer(1, 0.2 * inch),
    ]

    png = satisfaction_pie_png(ctx.tally)
    if png is None:
        story.append(
            _para("No multiple-choice satisfaction responses recorded.", styles["BodyText"])
        )
        return story

    width, height = ImageReader(io.BytesIO(png)).getSize()
    scale = min(1.0, _CHART_MAX_WIDTH / width)
    story.append(Image(io.BytesIO(png), width=width * scale, height=height * scale))
    story.append(Spacer(1, 0.2 * inch))

    rows = [["Response", "Count", "Percentage"]]
    rows.extend([s.label, str(s.count), s.percent_label] for s in ctx.tally)
    table = Table(rows, hAlign="CENTER")
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.grey),
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
            ]
        )
    )
    story.append(table)
    return story


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_pdf(result: AnalysisResult, *, title: Optional[str] = None) -> bytes:
    """Return the PDF report for *result* as bytes.

    Identical input yields identical bytes. An empty result still produces a
    complete document with zero overview values.
    """

    title = title or config.REPORT_TITLE
    ctx = build_report_context(result, title=title)
    styles = _styles()

    story: List = []
    story.extend(_title_page(ctx, styles))
    story.extend(_overview(ctx, styles))
    for section in ctx.sections:
        story.extend(_department(section, styles))
    story.extend(_distribution_page(ctx, styles))

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        rightMargin=72,
        leftMargin=72,
        topMargin=72,
        bottomMargin=72,
        title=title,
        invariant=True,
    )
    doc.build(story)
    logger.debug(
        "Built PDF report: %d departments, %d bytes", len(ctx.sections), buf.tell()
    )
    return buf.getvalue()


def default_output_path() -> Path:
    return Path(config.REPORT_OUTPUT_DIR) / config.REPORT_FILENAME


def render_report(
    result: AnalysisResult,
    output_path: Optional[Union[str, Path]] = None,
    *,
    title: Optional[str] = None,
) -> Path:
    """Write the PDF report for *result* to *output_path* and return it.

    Raises :class:`RenderError` if the directory cannot be created or the
    file cannot be written.
    """

    path = Path(output_path) if output_path is not None else default_output_path()
    document = build_pdf(result, title=title)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RenderError(f"Cannot create report directory {path.parent}: {exc}") from exc

    try:
        path.write_bytes(document)
    except OSError as exc:
        raise RenderError(f"Cannot write report to {path}: {exc}") from exc

    logger.info("Survey analysis report written to %s", path)
    return path


def render_summary(
    result: AnalysisResult, *, title: Optional[str] = None
) -> str:
    """Render a Markdown summary of *result* (overview, departments, tally)."""

    context = build_report_context(result, title=title)
    template = _env.get_template("summary.md.j2")
    return template.render(**context.to_dict())

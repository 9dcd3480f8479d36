"""Context dataclasses for rendering survey analysis reports.

This module turns an :class:`AnalysisResult` into `ReportContext`, a typed
container of already formatted lines. Both the PDF renderer and the
Markdown summary template read from the same context, so the wording of a
report lives in one place and can be unit-tested without opening a PDF.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from survey_analytics.analysis.classifier import QuestionCategory
from survey_analytics.analysis.scoring import round_half_up
from survey_analytics.reporting import config
from survey_analytics.reporting.models import (
    AnalysisResult,
    DepartmentStats,
    QuestionAnalysis,
    SatisfactionTally,
)

__all__ = [
    "QuestionBlock",
    "DepartmentSection",
    "TallySlice",
    "ReportContext",
    "build_report_context",
]


def _pct(value: float) -> str:
    return f"{round_half_up(value, 1):.1f}%"


@dataclass(slots=True)
class QuestionBlock:
    """One question's heading and its type-specific lines."""

    number: int
    heading: str
    category: str
    heading_line: str = ""
    lines: List[str] = field(default_factory=list)
    total_line: str = ""


@dataclass(slots=True)
class DepartmentSection:
    name: str
    total_responses: int
    satisfaction: int
    dissatisfaction: int
    questions: List[QuestionBlock] = field(default_factory=list)


@dataclass(slots=True)
class TallySlice:
    label: str
    count: int
    percentage: float

    @property
    def percent_label(self) -> str:
        return _pct(self.percentage)

    @property
    def caption(self) -> str:
        return f"{self.label}: {self.count} ({self.percent_label})"


@dataclass(slots=True)
class ReportContext:
    """Container with all fields used by the report renderers."""

    title: str
    overview_lines: List[str]
    sections: List[DepartmentSection] = field(default_factory=list)
    tally: List[TallySlice] = field(default_factory=list)
    tally_total: int = 0

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) for Jinja rendering."""
        data = asdict(self)
        data["tally"] = [
            {**asdict(s), "caption": s.caption} for s in self.tally
        ]
        return data

    __call__ = to_dict


# ---------------------------------------------------------------------------
# Per-category formatting
# ---------------------------------------------------------------------------
def _text_lines(q: QuestionAnalysis) -> List[str]:
    return [f"{i}. {answer}" for i, answer in enumerate(q.responses, start=1)]


def _choice_lines(q: QuestionAnalysis, noun: str) -> List[str]:
    return [
        f"{option}: {count} {noun} ({_pct(q.percentage(option))})"
        for option, count in q.responses.items()
    ]


def _star_lines(q: QuestionAnalysis) -> List[str]:
    lines = [
        f"{stars} star ({count} selections)" for stars, count in q.star_counts().items()
    ]
    average = q.average_rating if q.average_rating is not None else q.mean_star_rating()
    lines.append(f"Average Star Rating: {average or 0.0:.1f}")
    return lines


def _question_block(q: QuestionAnalysis) -> QuestionBlock:
    category = q.category or QuestionCategory.TEXT
    block = QuestionBlock(number=q.number, heading=q.question, category=category.value)

    if category is QuestionCategory.TEXT:
        block.heading_line = "Text Responses:"
        block.lines = _text_lines(q)
    elif category is QuestionCategory.MCQ:
        block.lines = _choice_lines(q, "responses")
    elif category is QuestionCategory.CHECKBOX:
        block.lines = _choice_lines(q, "selections")
    else:
        block.lines = _star_lines(q)

    block.total_line = f"Total responses for this question: {q.response_count}"
    return block


def _department_section(dept: DepartmentStats) -> DepartmentSection:
    return DepartmentSection(
        name=dept.name,
        total_responses=dept.total_responses,
        satisfaction=dept.satisfaction,
        dissatisfaction=dept.dissatisfaction,
        questions=[_question_block(q) for q in dept.ordered_questions()],
    )


def _tally_slices(tally: SatisfactionTally) -> List[TallySlice]:
    return [
        TallySlice(label=label, count=count, percentage=tally.percentage(label))
        for label, count in tally.counts.items()
    ]


def overview_lines(result: AnalysisResult) -> List[str]:
    ov = result.overview
    return [
        f"Total Responses: {ov.total_responses}",
        f"Number of Departments: {ov.department_count}",
        f"Average Satisfaction: {ov.average_satisfaction}%",
        f"Average Dissatisfaction: {ov.average_dissatisfaction}%",
    ]


def build_report_context(
    result: AnalysisResult, *, title: Optional[str] = None
) -> ReportContext:
    """Convert an :class:`AnalysisResult` into :class:`ReportContext`.

    The function is *pure*; it does not mutate *result*.
    """

    return ReportContext(
        title=title or config.REPORT_TITLE,
        overview_lines=overview_lines(result),
        sections=[_department_section(d) for d in result.departments.values()],
        tally=_tally_slices(result.satisfaction_tally),
        tally_total=result.satisfaction_tally.total,
    )

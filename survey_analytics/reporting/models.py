"""Data structures for the survey analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from survey_analytics.analysis.classifier import (
    SATISFACTION_LABELS,
    QuestionCategory,
    parse_stars,
)
from survey_analytics.analysis.scoring import MAX_STARS, round_half_up
from survey_analytics.exceptions import PartialDataWarning

__all__ = [
    "QuestionAnalysis",
    "DepartmentStats",
    "OverviewStats",
    "SatisfactionTally",
    "AnalysisResult",
]


def percent_of(count: int, total: int) -> float:
    """Return *count* as a percentage of *total* (0 when *total* is 0)."""
    return count / total * 100 if total else 0.0


@dataclass(slots=True)
class QuestionAnalysis:
    """Answer distribution of one question within one department.

    For checkbox questions every selected option is counted, so the sum of
    ``responses`` may exceed ``response_count``.
    """

    number: int
    question: str
    category: Optional[QuestionCategory] = None
    responses: Dict[str, int] = field(default_factory=dict)
    response_count: int = 0
    average_rating: Optional[float] = None

    def percentage(self, answer: str) -> float:
        """Share of this question's respondents that gave *answer*."""
        return percent_of(self.responses.get(answer, 0), self.response_count)

    def star_counts(self) -> Dict[int, int]:
        """Return ``{5: n, 4: n, ..., 1: n}``; star values never seen are 0."""
        counts = {stars: 0 for stars in range(MAX_STARS, 0, -1)}
        for answer, count in self.responses.items():
            stars = parse_stars(answer)
            if stars in counts:
                counts[stars] += count
        return counts

    def mean_star_rating(self) -> Optional[float]:
        """Mean over star-formatted answers only, one decimal; ``None`` if none."""
        total_stars = 0
        total_count = 0
        for answer, count in self.responses.items():
            stars = parse_stars(answer)
            if stars is not None:
                total_stars += stars * count
                total_count += count
        if not total_count:
            return None
        return round_half_up(total_stars / total_count, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "question": self.question,
            "type": self.category.value if self.category else None,
            "responses": dict(self.responses),
            "response_count": self.response_count,
            "average_rating": self.average_rating,
        }


@dataclass(slots=True)
class DepartmentStats:
    """Per-department totals and question breakdown."""

    name: str
    total_responses: int = 0
    questions: Dict[int, QuestionAnalysis] = field(default_factory=dict)
    satisfaction: int = 0
    dissatisfaction: int = 0

    def ordered_questions(self) -> List[QuestionAnalysis]:
        return [self.questions[n] for n in sorted(self.questions)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_responses": self.total_responses,
            "satisfaction": self.satisfaction,
            "dissatisfaction": self.dissatisfaction,
            "question_analysis": {
                str(q.number): q.to_dict() for q in self.ordered_questions()
            },
        }


@dataclass(frozen=True)
class OverviewStats:
    total_responses: int = 0
    department_count: int = 0
    average_satisfaction: int = 0
    average_dissatisfaction: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_responses": self.total_responses,
            "number_of_departments": self.department_count,
            "average_satisfaction": self.average_satisfaction,
            "average_dissatisfaction": self.average_dissatisfaction,
        }


@dataclass(slots=True)
class SatisfactionTally:
    """Counts of MCQ answers by satisfaction label across all departments.

    ``counts`` stays empty until at least one MCQ question has been seen;
    after that all five labels are present, in fixed order.
    """

    counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def zeroed(cls) -> "SatisfactionTally":
        return cls(counts={label: 0 for label in SATISFACTION_LABELS})

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def percentage(self, label: str) -> float:
        return percent_of(self.counts.get(label, 0), self.total)

    def to_dict(self) -> Dict[str, int]:
        return dict(self.counts)


@dataclass(slots=True)
class AnalysisResult:
    """Everything one analysis run produces, ready for rendering or serializing."""

    overview: OverviewStats
    departments: Dict[str, DepartmentStats] = field(default_factory=dict)
    satisfaction_tally: SatisfactionTally = field(default_factory=SatisfactionTally)
    warnings: List[PartialDataWarning] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.overview.total_responses == 0

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable nested ``dict``."""
        return {
            "overview": self.overview.to_dict(),
            "department_stats": {
                name: dept.to_dict() for name, dept in self.departments.items()
            },
            "satisfaction_tally": self.satisfaction_tally.to_dict(),
            "warnings": [w.to_dict() for w in self.warnings],
        }

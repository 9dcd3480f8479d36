"""Aggregate survey response rows into an :class:`AnalysisResult`.

Aggregation is a two-phase affair: :meth:`AnalysisBuilder.add` folds rows
into raw counts and score sums, :meth:`AnalysisBuilder.finalize` turns those
into rounded percentages exactly once. Each analysis run owns its builder;
nothing is shared between runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from survey_analytics.analysis.classifier import (
    SATISFACTION_LABELS,
    QuestionCategory,
    classify,
    split_options,
)
from survey_analytics.analysis.scoring import SatisfactionScore, round_half_up, score
from survey_analytics.exceptions import PartialDataWarning
from survey_analytics.reporting.models import (
    AnalysisResult,
    DepartmentStats,
    OverviewStats,
    QuestionAnalysis,
    SatisfactionTally,
)
from survey_analytics.responses import UNKNOWN_DEPARTMENT, ResponseRow

logger = logging.getLogger(__name__)

__all__ = ["AnalysisBuilder", "aggregate", "UNKNOWN_DEPARTMENT"]

# Answers in these categories re-stamp the question's category; MCQ and text
# answers only fill it in when the question has none yet.
_STICKY_CATEGORIES = (QuestionCategory.STAR_RATING, QuestionCategory.CHECKBOX)


@dataclass(slots=True)
class _ScoreSums:
    satisfied_total: float = 0.0
    satisfied_count: int = 0
    dissatisfied_total: float = 0.0
    dissatisfied_count: int = 0

    def add(self, result: SatisfactionScore) -> None:
        if result.satisfied:
            self.satisfied_total += result.value
            self.satisfied_count += 1
        elif result.dissatisfied:
            self.dissatisfied_total += result.value
            self.dissatisfied_count += 1

    def merge(self, other: "_ScoreSums") -> None:
        self.satisfied_total += other.satisfied_total
        self.satisfied_count += other.satisfied_count
        self.dissatisfied_total += other.dissatisfied_total
        self.dissatisfied_count += other.dissatisfied_count

    @staticmethod
    def _mean(total: float, count: int) -> int:
        return int(round_half_up(total / count)) if count else 0

    @property
    def satisfaction(self) -> int:
        return self._mean(self.satisfied_total, self.satisfied_count)

    @property
    def dissatisfaction(self) -> int:
        return self._mean(self.dissatisfied_total, self.dissatisfied_count)


def _update_category(analysis: QuestionAnalysis, category: QuestionCategory) -> None:
    if category in _STICKY_CATEGORIES or analysis.category is None:
        analysis.category = category


class AnalysisBuilder:
    """Accumulate response rows, then :meth:`finalize` into statistics."""

    def __init__(self) -> None:
        self._departments: Dict[str, DepartmentStats] = {}
        self._department_sums: Dict[str, _ScoreSums] = {}
        self._sums = _ScoreSums()
        self._warnings: List[PartialDataWarning] = []
        self._result: Optional[AnalysisResult] = None

    # ------------------------------------------------------------------
    # Accumulate
    # ------------------------------------------------------------------
    def _department(self, name: str) -> DepartmentStats:
        dept = self._departments.get(name)
        if dept is None:
            dept = self._departments[name] = DepartmentStats(name=name)
            self._department_sums[name] = _ScoreSums()
        return dept

    def _check_open(self) -> None:
        if self._result is not None:
            raise RuntimeError("AnalysisBuilder already finalized")

    def _skip(self, department: str, number: int, reason: str) -> None:
        warning = PartialDataWarning(
            f"Skipping question {number} for department '{department}': {reason}",
            department=department,
            question_number=number,
        )
        logger.warning("%s", warning)
        self._warnings.append(warning)

    def add(self, row: ResponseRow) -> None:
        """Fold one response row into the running totals."""
        self._check_open()

        name = row.department or UNKNOWN_DEPARTMENT
        dept = self._department(name)
        dept_sums = self._department_sums[name]
        dept.total_responses += 1

        for number, question, answer in row.numbered_answers():
            if question is None:
                self._skip(name, number, "missing question text")
                continue
            if answer is None:
                self._skip(name, number, "missing answer")
                continue

            analysis = dept.questions.get(number)
            if analysis is None:
                analysis = dept.questions[number] = QuestionAnalysis(
                    number=number, question=question
                )

            category = classify(answer)
            _update_category(analysis, category)

            if category is QuestionCategory.CHECKBOX:
                options = split_options(answer)
            else:
                options = [answer.strip()]
            for option in options:
                analysis.responses[option] = analysis.responses.get(option, 0) + 1
            analysis.response_count += 1

            result = score(category, answer)
            dept_sums.add(result)
            self._sums.add(result)

    def add_all(self, rows: Iterable[ResponseRow]) -> "AnalysisBuilder":
        for row in rows:
            self.add(row)
        return self

    def merge(self, other: "AnalysisBuilder") -> "AnalysisBuilder":
        """Fold a builder run over a disjoint set of rows into this one.

        Departments and questions new to *self* are appended in *other*'s
        order, so merging chunks in input order matches a sequential run.
        """
        self._check_open()
        other._check_open()

        for name, theirs in other._departments.items():
            ours = self._department(name)
            ours.total_responses += theirs.total_responses
            self._department_sums[name].merge(other._department_sums[name])
            for number, their_q in theirs.questions.items():
                our_q = ours.questions.get(number)
                if our_q is None:
                    our_q = ours.questions[number] = QuestionAnalysis(
                        number=number, question=their_q.question
                    )
                if their_q.category is not None:
                    _update_category(our_q, their_q.category)
                for answer, count in their_q.responses.items():
                    our_q.responses[answer] = our_q.responses.get(answer, 0) + count
                our_q.response_count += their_q.response_count

        self._sums.merge(other._sums)
        self._warnings.extend(other._warnings)
        return self

    # ------------------------------------------------------------------
    # Finalize
    # ------------------------------------------------------------------
    def _tally(self) -> SatisfactionTally:
        mcq_questions = [
            q
            for dept in self._departments.values()
            for q in dept.questions.values()
            if q.category is QuestionCategory.MCQ
        ]
        if not mcq_questions:
            return SatisfactionTally()

        tally = SatisfactionTally.zeroed()
        for q in mcq_questions:
            for label in SATISFACTION_LABELS:
                tally.counts[label] += q.responses.get(label, 0)
        return tally

    def finalize(self) -> AnalysisResult:
        """Compute rounded percentages and return the result (idempotent)."""
        if self._result is not None:
            return self._result

        for name, dept in self._departments.items():
            sums = self._department_sums[name]
            dept.satisfaction = sums.satisfaction
            dept.dissatisfaction = sums.dissatisfaction
            for q in dept.questions.values():
                if q.category is QuestionCategory.STAR_RATING:
                    q.average_rating = q.mean_star_rating()

        overview = OverviewStats(
            total_responses=sum(d.total_responses for d in self._departments.values()),
            department_count=len(self._departments),
            average_satisfaction=self._sums.satisfaction,
            average_dissatisfaction=self._sums.dissatisfaction,
        )
        self._result = AnalysisResult(
            overview=overview,
            departments=dict(self._departments),
            satisfaction_tally=self._tally(),
            warnings=list(self._warnings),
        )
        logger.debug(
            "Aggregated %d responses across %d departments (%d skipped fields)",
            overview.total_responses,
            overview.department_count,
            len(self._warnings),
        )
        return self._result


def aggregate(rows: Iterable[ResponseRow]) -> AnalysisResult:
    """Aggregate *rows* in one pass and return the finalized result."""
    return AnalysisBuilder().add_all(rows).finalize()

from __future__ import annotations

import pytest

from survey_analytics.reporting.aggregator import aggregate
from survey_analytics.responses import ResponseRow


def _row(department, *pairs):
    """Build a :class:`ResponseRow` from ``(question, answer)`` pairs."""
    return ResponseRow(department=department, answers=tuple(pairs))


@pytest.fixture()
def sample_rows():
    q1 = "How satisfied are you with your team?"
    q2 = "Rate the onboarding"
    q3 = "Which perks do you use?"
    q4 = "Anything else?"
    return [
        _row("Sales", (q1, "Very Satisfied"), (q2, "5 stars"), (q3, "Gym, Lunch"), (q4, "Great place")),
        _row("Sales", (q1, "Dissatisfied"), (q2, "1 star"), (q3, "Lunch"), (q4, "More coffee")),
        _row("Engineering", (q1, "Satisfied"), (q2, "4 stars"), (q3, "Gym"), (q4, "No answer")),
    ]


@pytest.fixture()
def sample_result(sample_rows):
    return aggregate(sample_rows)

"""Unit tests for analysis.scoring."""
from __future__ import annotations

import pytest

from survey_analytics.analysis.classifier import QuestionCategory, classify
from survey_analytics.analysis.scoring import round_half_up, score


@pytest.mark.parametrize(
    "answer, satisfied, dissatisfied, value",
    [
        ("5 stars", True, False, 100.0),
        ("4 stars", True, False, 80.0),
        ("3 stars", True, False, 60.0),
        ("2 stars", False, True, 60.0),
        ("1 star", False, True, 80.0),
    ],
)
def test_star_scores(answer, satisfied, dissatisfied, value):
    result = score(QuestionCategory.STAR_RATING, answer)
    assert result.satisfied is satisfied
    assert result.dissatisfied is dissatisfied
    assert result.value == pytest.approx(value)


@pytest.mark.parametrize("answer", ["0 stars", "6 stars", "10 stars", "garbage"])
def test_out_of_range_stars_do_not_contribute(answer):
    assert not score(QuestionCategory.STAR_RATING, answer).contributes


@pytest.mark.parametrize(
    "label, satisfied, dissatisfied, value",
    [
        ("Very Satisfied", True, False, 100),
        ("Satisfied", True, False, 75),
        ("Dissatisfied", False, True, 75),
        ("Very Dissatisfied", False, True, 100),
    ],
)
def test_mcq_scores(label, satisfied, dissatisfied, value):
    result = score(QuestionCategory.MCQ, label)
    assert (result.satisfied, result.dissatisfied, result.value) == (
        satisfied,
        dissatisfied,
        value,
    )


@pytest.mark.parametrize("label", ["Neutral", "No answer"])
def test_neutral_answers_do_not_contribute(label):
    assert not score(QuestionCategory.MCQ, label).contributes


@pytest.mark.parametrize("answer", ["Satisfied, Very Satisfied", "Loved it"])
def test_checkbox_and_text_never_contribute(answer):
    assert not score(classify(answer), answer).contributes


def test_round_half_up():
    assert round_half_up(87.5) == 88
    assert round_half_up(2.5) == 3
    assert round_half_up(3.65, 1) == 3.7
    assert round_half_up(11 / 3, 1) == 3.7

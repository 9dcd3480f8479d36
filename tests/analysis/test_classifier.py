"""Unit tests for analysis.classifier."""
from __future__ import annotations

import pytest

from survey_analytics.analysis.classifier import (
    SATISFACTION_LABELS,
    QuestionCategory,
    classify,
    parse_stars,
    split_options,
)


@pytest.mark.parametrize(
    "answer", ["1 star", "5 stars", "3Stars", "4  STARS", " 2 stars ", "5 Star"]
)
def test_star_pattern(answer):
    assert classify(answer) is QuestionCategory.STAR_RATING


@pytest.mark.parametrize(
    "answer",
    ["Gym, Lunch", "Very Satisfied, Satisfied", "Neutral,Dissatisfied", "5 stars, 4 stars"],
)
def test_comma_means_checkbox(answer):
    """Comma-joined satisfaction labels are still checkbox answers."""
    assert classify(answer) is QuestionCategory.CHECKBOX


@pytest.mark.parametrize("answer", list(SATISFACTION_LABELS) + ["No answer", "  Neutral  "])
def test_satisfaction_labels_are_mcq(answer):
    assert classify(answer) is QuestionCategory.MCQ


@pytest.mark.parametrize(
    "answer", ["", None, "Great team", "very satisfied", "stars", "five stars"]
)
def test_everything_else_is_text(answer):
    assert classify(answer) is QuestionCategory.TEXT


def test_parse_stars():
    assert parse_stars("10 stars") == 10
    assert parse_stars("3 star") == 3
    assert parse_stars("Satisfied") is None
    assert parse_stars(None) is None


def test_split_options_drops_blanks():
    assert split_options("Gym, , Lunch ,") == ["Gym", "Lunch"]

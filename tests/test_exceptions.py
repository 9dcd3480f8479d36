"""Tests for the exception hierarchy."""
from __future__ import annotations

from survey_analytics.exceptions import InputError, RenderError, SurveyAnalyticsError


def test_input_error_keeps_message():
    err = InputError("CSV file is empty: responses.csv")

    assert isinstance(err, SurveyAnalyticsError)
    assert str(err) == "CSV file is empty: responses.csv"
    assert err.args == ("CSV file is empty: responses.csv",)


def test_render_error_carries_result(sample_result):
    err = RenderError("disk full", result=sample_result)

    assert err.result is sample_result
    assert str(err) == "disk full"

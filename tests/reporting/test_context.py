"""Unit tests for ReportContext and its builder."""
from __future__ import annotations

from survey_analytics.reporting.aggregator import aggregate
from survey_analytics.reporting.context import ReportContext, build_report_context


def _blocks(ctx: ReportContext, department: str):
    section = next(s for s in ctx.sections if s.name == department)
    return {b.number: b for b in section.questions}


def test_overview_lines(sample_result):
    ctx = build_report_context(sample_result)

    assert ctx.overview_lines == [
        "Total Responses: 3",
        "Number of Departments: 2",
        "Average Satisfaction: 89%",
        "Average Dissatisfaction: 78%",
    ]


def test_question_blocks_by_category(sample_result):
    blocks = _blocks(build_report_context(sample_result), "Sales")

    assert blocks[1].lines == [
        "Very Satisfied: 1 responses (50.0%)",
        "Dissatisfied: 1 responses (50.0%)",
    ]
    assert blocks[2].lines == [
        "5 star (1 selections)",
        "4 star (0 selections)",
        "3 star (0 selections)",
        "2 star (0 selections)",
        "1 star (1 selections)",
        "Average Star Rating: 3.0",
    ]
    assert blocks[3].lines == [
        "Gym: 1 selections (50.0%)",
        "Lunch: 2 selections (100.0%)",
    ]
    assert blocks[4].heading_line == "Text Responses:"
    assert blocks[4].lines == ["1. Great place", "2. More coffee"]
    assert blocks[4].total_line == "Total responses for this question: 2"


def test_questions_in_ascending_order(sample_result):
    ctx = build_report_context(sample_result)

    for section in ctx.sections:
        numbers = [b.number for b in section.questions]
        assert numbers == sorted(numbers)


def test_tally_slices(sample_result):
    ctx = build_report_context(sample_result)

    assert ctx.tally_total == 3
    assert [s.caption for s in ctx.tally] == [
        "Very Satisfied: 1 (33.3%)",
        "Satisfied: 1 (33.3%)",
        "Neutral: 0 (0.0%)",
        "Dissatisfied: 1 (33.3%)",
        "Very Dissatisfied: 0 (0.0%)",
    ]


def test_empty_result_context():
    ctx = build_report_context(aggregate([]), title="Empty")

    assert ctx.title == "Empty"
    assert ctx.sections == []
    assert ctx.tally == []
    assert ctx.overview_lines[0] == "Total Responses: 0"


def test_to_dict_roundtrip(sample_result):
    """`to_dict` should give plain nested data and alias __call__."""
    ctx = build_report_context(sample_result)
    as_dict = ctx.to_dict()

    assert as_dict["title"] == ctx.title
    assert as_dict["sections"][0]["name"] == "Sales"
    assert as_dict["tally"][0]["caption"] == "Very Satisfied: 1 (33.3%)"
    assert ctx() == as_dict

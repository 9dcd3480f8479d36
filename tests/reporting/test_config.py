"""Tests for environment-driven report settings."""
from __future__ import annotations

import importlib
import os

import pytest

from survey_analytics.reporting import config
from survey_analytics.reporting.aggregator import aggregate
from survey_analytics.reporting.render import render_summary


@pytest.fixture()
def dotenv_dir(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("REPORT_TITLE=From Dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("REPORT_TITLE", raising=False)
    yield tmp_path
    # load_dotenv writes into os.environ directly
    os.environ.pop("REPORT_TITLE", None)
    monkeypatch.undo()
    importlib.reload(config)


def test_dotenv_in_working_directory_sets_title(dotenv_dir):
    importlib.reload(config)

    assert config.REPORT_TITLE == "From Dotenv"
    assert "From Dotenv" in render_summary(aggregate([]))


def test_explicit_title_wins(dotenv_dir):
    importlib.reload(config)

    summary = render_summary(aggregate([]), title="Q3 Pulse")
    assert "Q3 Pulse" in summary
    assert "From Dotenv" not in summary

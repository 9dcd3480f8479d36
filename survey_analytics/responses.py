"""Survey response rows and the tabular export format they travel in.

The export collaborator writes one CSV row per submission with the columns
``Survey Title, Department, Employee Name, Submission Date, Submission Time,
Question 1, Answer 1, ...``. :func:`load_responses` reads that file back
into :class:`ResponseRow` objects for the analysis engine, streaming it in
chunks so very large exports never sit in memory as one frame.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union
from zoneinfo import ZoneInfo

import pandas as pd

from survey_analytics.exceptions import InputError
from survey_analytics.reporting import config

logger = logging.getLogger(__name__)

__all__ = [
    "ResponseRow",
    "SurveyQuestion",
    "SubmissionRecord",
    "load_responses",
    "read_responses",
    "export_responses",
]

DEPARTMENT_COLUMN = "Department"
BASE_COLUMNS = [
    "Survey Title",
    DEPARTMENT_COLUMN,
    "Employee Name",
    "Submission Date",
    "Submission Time",
]

UNKNOWN_SURVEY = "Unknown Survey"
UNKNOWN_DEPARTMENT = "Unknown Department"
NO_ANSWER = "No answer"

_QUESTION_COL_RE = re.compile(r"^(Question|Answer) (\d+)$")
# Spreadsheet-safe cells written as ="value"
_EXCEL_STRING_RE = re.compile(r'^="(.*)"$', re.DOTALL)

_SUBMISSION_TZ = ZoneInfo("Asia/Kolkata")

QAPair = Tuple[Optional[str], Optional[str]]


@dataclass(frozen=True)
class ResponseRow:
    """One survey submission as seen by the analysis engine.

    ``answers`` holds ``(question_text, answer_text)`` pairs where position
    ``i`` is question number ``i + 1``. Either side of a pair may be
    ``None`` when the cell was blank.
    """

    department: Optional[str]
    answers: Tuple[QAPair, ...] = ()
    metadata: Dict[str, str] = field(default_factory=dict, compare=False)

    def numbered_answers(self) -> Iterator[Tuple[int, Optional[str], Optional[str]]]:
        """Yield ``(question_number, question_text, answer_text)`` from 1."""
        for idx, (question, answer) in enumerate(self.answers, start=1):
            yield idx, question, answer


def _clean_cell(value: object) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value)
    match = _EXCEL_STRING_RE.match(text)
    if match:
        text = match.group(1).replace('""', '"')
    return text if text.strip() else None


def _question_numbers(columns: Sequence[str]) -> List[int]:
    numbers = set()
    for col in columns:
        match = _QUESTION_COL_RE.match(str(col).strip())
        if match:
            numbers.add(int(match.group(2)))
    return sorted(numbers)


def _row_from_record(record: Dict[str, object], max_question: int) -> ResponseRow:
    pairs: List[QAPair] = []
    for n in range(1, max_question + 1):
        pairs.append(
            (
                _clean_cell(record.get(f"Question {n}")),
                _clean_cell(record.get(f"Answer {n}")),
            )
        )

    metadata = {}
    for key, value in record.items():
        if key == DEPARTMENT_COLUMN or _QUESTION_COL_RE.match(str(key).strip()):
            continue
        cell = _clean_cell(value)
        if cell is not None:
            metadata[str(key)] = cell
    return ResponseRow(
        department=_clean_cell(record.get(DEPARTMENT_COLUMN)),
        answers=tuple(pairs),
        metadata=metadata,
    )


def _log_bad_line(line: List[str]) -> None:
    logger.warning("Skipping malformed CSV line with %d fields", len(line))
    return None


def load_responses(
    csv_path: Union[str, Path], *, chunk_size: Optional[int] = None
) -> Iterator[ResponseRow]:
    """Stream :class:`ResponseRow` objects from an exported responses CSV.

    Raises :class:`InputError` straight away if the file is missing or has
    no header, and at the end of iteration if it held no data rows.
    """

    path = Path(csv_path)
    if not path.is_file():
        raise InputError(f"CSV file not found at path: {path}")

    try:
        reader = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            chunksize=chunk_size or config.CSV_CHUNK_SIZE,
            engine="python",
            on_bad_lines=_log_bad_line,
        )
    except pd.errors.EmptyDataError as exc:
        raise InputError(f"CSV file is empty: {path}") from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise InputError(f"Could not read CSV file {path}: {exc}") from exc

    return _iter_rows(path, reader)


def _iter_rows(path: Path, reader) -> Iterator[ResponseRow]:
    count = 0
    try:
        with reader:
            for chunk in reader:
                max_question = max(_question_numbers(list(chunk.columns)), default=0)
                for record in chunk.to_dict("records"):
                    count += 1
                    yield _row_from_record(record, max_question)
    except pd.errors.EmptyDataError:
        pass
    except (UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise InputError(f"Could not read CSV file {path}: {exc}") from exc

    if count == 0:
        raise InputError(f"CSV file is empty: {path}")
    logger.debug("Read %d response rows from %s", count, path)


def read_responses(csv_path: Union[str, Path]) -> List[ResponseRow]:
    """Eager variant of :func:`load_responses`."""
    return list(load_responses(csv_path))


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SurveyQuestion:
    """A question as defined on the survey (``type`` is e.g. ``star``)."""

    text: str
    type: str = "text"


@dataclass(slots=True)
class SubmissionRecord:
    """A stored submission joined with its survey, ready for export."""

    employee_name: str
    submitted_at: datetime
    questions: Sequence[SurveyQuestion] = ()
    answers: Sequence[Union[str, int, Sequence[str], None]] = ()
    department: Optional[str] = None
    survey_title: Optional[str] = None

    def answer_at(self, index: int):
        return self.answers[index] if index < len(self.answers) else None


def _format_answer(question: SurveyQuestion, raw) -> str:
    if raw is None or raw == "" or raw == []:
        return NO_ANSWER
    if question.type == "star":
        return f"{raw} stars"
    if isinstance(raw, (list, tuple)):
        return ", ".join(str(opt) for opt in raw)
    return str(raw)


def _submission_cells(record: SubmissionRecord) -> Dict[str, str]:
    stamp = record.submitted_at
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    local = stamp.astimezone(_SUBMISSION_TZ)

    cells = {
        "Survey Title": record.survey_title or UNKNOWN_SURVEY,
        DEPARTMENT_COLUMN: record.department or UNKNOWN_DEPARTMENT,
        "Employee Name": record.employee_name,
        "Submission Date": f"{local.month}/{local.day}/{local.year}",
        "Submission Time": local.strftime("%I:%M:%S %p"),
    }
    for idx, question in enumerate(record.questions):
        cells[f"Question {idx + 1}"] = question.text
        cells[f"Answer {idx + 1}"] = _format_answer(question, record.answer_at(idx))
    return cells


def export_responses(
    records: Sequence[SubmissionRecord], csv_path: Union[str, Path]
) -> Path:
    """Write *records* to *csv_path* in the export layout and return the path.

    The number of question/answer column pairs is the largest question count
    of any record; shorter submissions leave the extra cells blank.
    """

    max_questions = max((len(r.questions) for r in records), default=0)
    columns = list(BASE_COLUMNS)
    for n in range(1, max_questions + 1):
        columns.extend([f"Question {n}", f"Answer {n}"])

    frame = pd.DataFrame([_submission_cells(r) for r in records], columns=columns)

    path = Path(csv_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False)
    logger.debug("Exported %d submissions to %s", len(records), path)
    return path

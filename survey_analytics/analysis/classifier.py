"""Decide which kind of survey question produced an answer.

The category is inferred from the answer text alone, by the first matching
rule in this order:

1. ``<n> star`` / ``<n> stars``          -> ``StarRating``
2. contains a comma                       -> ``Checkbox``
3. one of the satisfaction labels or
   ``No answer``                          -> ``MCQ``
4. anything else (including empty)        -> ``Text``
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Optional

__all__ = [
    "QuestionCategory",
    "SATISFACTION_LABELS",
    "NO_ANSWER",
    "classify",
    "parse_stars",
    "split_options",
]


class QuestionCategory(str, Enum):
    """Enumeration of answer type categories."""

    STAR_RATING = "StarRating"
    CHECKBOX = "Checkbox"
    MCQ = "MCQ"
    TEXT = "Text"


SATISFACTION_LABELS = (
    "Very Satisfied",
    "Satisfied",
    "Neutral",
    "Dissatisfied",
    "Very Dissatisfied",
)
NO_ANSWER = "No answer"

_STAR_RE = re.compile(r"^(\d+)\s*stars?$", re.IGNORECASE)
_MCQ_ANSWERS = frozenset(SATISFACTION_LABELS) | {NO_ANSWER}


def parse_stars(answer: Optional[str]) -> Optional[int]:
    """Return the star count of a star-rating answer, else ``None``."""
    if not answer:
        return None
    match = _STAR_RE.match(answer.strip())
    return int(match.group(1)) if match else None


def split_options(answer: str) -> list[str]:
    """Split a comma-joined checkbox answer into its trimmed options."""
    return [opt.strip() for opt in answer.split(",") if opt.strip()]


def classify(answer: Optional[str]) -> QuestionCategory:
    """Return the :class:`QuestionCategory` for *answer*."""
    if not answer:
        return QuestionCategory.TEXT
    if parse_stars(answer) is not None:
        return QuestionCategory.STAR_RATING
    if "," in answer:
        return QuestionCategory.CHECKBOX
    if answer.strip() in _MCQ_ANSWERS:
        return QuestionCategory.MCQ
    return QuestionCategory.TEXT

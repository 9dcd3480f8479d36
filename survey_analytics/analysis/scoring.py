"""Map classified answers to satisfaction scores."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from survey_analytics.analysis.classifier import QuestionCategory, parse_stars

__all__ = [
    "SATISFACTION_LEVELS",
    "SatisfactionScore",
    "score",
    "round_half_up",
]

SATISFACTION_LEVELS: Dict[str, int] = {
    "Very Satisfied": 100,
    "Satisfied": 75,
    "Neutral": 50,
    "Dissatisfied": 25,
    "Very Dissatisfied": 0,
}

_SATISFIED = ("Very Satisfied", "Satisfied")
_DISSATISFIED = ("Dissatisfied", "Very Dissatisfied")

MAX_STARS = 5


@dataclass(frozen=True)
class SatisfactionScore:
    """Contribution of one answer to the satisfaction averages.

    At most one of the two flags is set; ``value`` is 0-100 and only
    meaningful when a flag is set.
    """

    satisfied: bool = False
    dissatisfied: bool = False
    value: float = 0.0

    @property
    def contributes(self) -> bool:
        return self.satisfied or self.dissatisfied


NO_CONTRIBUTION = SatisfactionScore()


def _score_stars(stars: Optional[int]) -> SatisfactionScore:
    if stars is None or not 1 <= stars <= MAX_STARS:
        return NO_CONTRIBUTION
    if stars >= 3:
        return SatisfactionScore(satisfied=True, value=stars / MAX_STARS * 100)
    return SatisfactionScore(
        dissatisfied=True, value=(MAX_STARS - stars) / MAX_STARS * 100
    )


def _score_label(label: str) -> SatisfactionScore:
    if label in _SATISFIED:
        return SatisfactionScore(satisfied=True, value=SATISFACTION_LEVELS[label])
    if label in _DISSATISFIED:
        return SatisfactionScore(
            dissatisfied=True, value=100 - SATISFACTION_LEVELS[label]
        )
    # Neutral / No answer
    return NO_CONTRIBUTION


def score(category: QuestionCategory, answer: Optional[str]) -> SatisfactionScore:
    """Return the :class:`SatisfactionScore` of *answer* under *category*.

    Checkbox and free-text answers never contribute.
    """
    if category is QuestionCategory.STAR_RATING:
        return _score_stars(parse_stars(answer))
    if category is QuestionCategory.MCQ:
        return _score_label((answer or "").strip())
    return NO_CONTRIBUTION


def round_half_up(value: float, digits: int = 0) -> float:
    """Round *value* half away from zero to *digits* decimals."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))

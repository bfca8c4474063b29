"""
Rating value model
Bounded score types, category taxonomy and the single normalization step
every aggregate goes through
"""

import logging
import math
from enum import Enum
from typing import Iterable, Optional, Union

from app.utils.exceptions import InvalidScoreError, UnknownCategoryError

logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Mentor star ratings are 0-5; one star is worth 20 points on the canonical scale
STAR_MULTIPLIER = 20


class ScoreScale(str, Enum):
    """Scale a collaborator declares for its raw scores"""
    PERCENT = "0-100"
    STARS = "0-5"


class Source(str, Enum):
    """Origin of an evaluation"""
    AI = "ai"
    MENTOR = "mentor"


class InterviewCategory(str, Enum):
    """Dimensions scored on AI interview answers"""
    CLARITY = "clarity"
    CONFIDENCE = "confidence"
    STRUCTURE = "structure"
    RELEVANCE = "relevance"
    TECHNICAL_ACCURACY = "technicalAccuracy"  # technical questions only


class MentorCategory(str, Enum):
    """Dimensions on structured mentor reviews"""
    FORMAT = "format"
    CONTENT = "content"
    RELEVANCE = "relevance"
    IMPACT = "impact"
    PRESENTATION = "presentation"
    TECHNICAL = "technical"


# Union of both enumerations, interview order first, without repeating "relevance"
KNOWN_CATEGORIES = tuple(dict.fromkeys(
    [c.value for c in InterviewCategory] + [c.value for c in MentorCategory]
))

_SCALE_MULTIPLIERS = {
    ScoreScale.PERCENT: 1,
    ScoreScale.STARS: STAR_MULTIPLIER,
}


def _parse_scale(source_scale: Union[ScoreScale, str]) -> ScoreScale:
    try:
        return ScoreScale(source_scale)
    except ValueError:
        raise InvalidScoreError(
            source_scale, str(source_scale), field="scale",
            allowed=[s.value for s in ScoreScale],
        ) from None


def normalize_score(
    raw: float,
    source_scale: Union[ScoreScale, str] = ScoreScale.PERCENT,
    field: Optional[str] = None,
) -> float:
    """
    Map a raw rating onto the canonical [0, 100] scale.

    Star ratings ("0-5") are multiplied by 20. Values that land outside
    [0, 100] after scaling are rejected, never clamped: out-of-range input is a
    collaborator bug that must surface. No rounding happens here.

    Time Complexity: O(1)
    Space Complexity: O(1)
    """
    scale = _parse_scale(source_scale)

    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(raw):
        raise InvalidScoreError(raw, scale.value, field=field)

    scaled = float(raw) * _SCALE_MULTIPLIERS[scale]
    if not SCORE_MIN <= scaled <= SCORE_MAX:
        logger.debug(f"[RATING] Rejected {raw!r} on scale {scale.value} (scaled to {scaled})")
        raise InvalidScoreError(raw, scale.value, field=field)

    return scaled


def clamp_0_to_100(n: float) -> int:
    """
    Clamp a combined score into [0, 100] and round to a whole percentage.

    Only for results of arithmetic (means), not raw input. Halves round up,
    so 70.5 reports as 71.
    """
    bounded = min(SCORE_MAX, max(SCORE_MIN, n))
    return int(math.floor(bounded + 0.5))


def parse_category(name: Union[str, Enum], allowed: Optional[Iterable[str]] = None) -> str:
    """
    Return the canonical category string, rejecting anything unrecognized.

    ``allowed`` narrows the accepted set, e.g. to MentorCategory values for a
    mentor review form.
    """
    value = name.value if isinstance(name, Enum) else name
    accepted = (
        [a.value if isinstance(a, Enum) else a for a in allowed]
        if allowed is not None
        else list(KNOWN_CATEGORIES)
    )
    if not isinstance(value, str) or value not in accepted:
        raise UnknownCategoryError(value, allowed=accepted)
    return value


def category_label(category: str) -> str:
    """technicalAccuracy -> technical accuracy"""
    words = []
    current = ""
    for ch in category:
        if ch.isupper() and current:
            words.append(current)
            current = ch.lower()
        else:
            current += ch.lower()
    if current:
        words.append(current)
    return " ".join(words)

import logging
import math
from typing import Optional

logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def clamp_score(value, field_name: str = "score") -> float:
    """Normalize an externally sourced score into [0, 100].

    Every score that enters the model from outside the scorers (upstream
    services, persisted match records) passes through here. Out-of-range
    values are corrected and logged, never rejected.

    Args:
        value: Raw score (any number-like value; None counts as 0)
        field_name: Name used in the warning message

    Returns:
        Score in range [0, 100]
    """
    if value is None:
        return SCORE_MIN
    try:
        score = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {field_name}={value!r}; defaulting to 0")
        return SCORE_MIN

    if score != score:  # NaN
        logger.warning(f"Invalid {field_name}=NaN; defaulting to 0")
        return SCORE_MIN

    if score > SCORE_MAX:
        logger.warning(f"Abnormal {field_name} {score} above {SCORE_MAX:.0f}, clamping")
        return SCORE_MAX
    if score < SCORE_MIN:
        logger.warning(f"Abnormal {field_name} {score} below {SCORE_MIN:.0f}, clamping")
        return SCORE_MIN
    return score


def non_negative(value, field_name: str = "value") -> float:
    """Coerce a count-like value (years, months) to a float >= 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {field_name}={value!r}; defaulting to 0")
        return 0.0
    if number < 0:
        logger.warning(f"Corrected {field_name} from {number!r} to 0")
        return 0.0
    return number


def resume_identity(file_id: Optional[str], name: Optional[str]) -> str:
    """
    Identity of a resume across the pool, job views and match records.

    The storage-assigned file id wins; the document name is a weaker
    fallback (two different files with the same name collapse into one).
    """
    if file_id:
        return str(file_id)
    return name or ""


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up (66.5 -> 67)."""
    return int(math.floor(float(value) + 0.5))

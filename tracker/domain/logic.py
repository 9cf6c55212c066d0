from typing import Optional, Sequence

from .enums import DIFFICULTY_STEP, Difficulty
from ..config import REVIEW_LADDER
from ..errors import UnknownIntervalError


def interval_days(token: str) -> int:
    """Days encoded in a ladder token, "30d" -> 30."""
    if not isinstance(token, str) or not token.endswith("d") or not token[:-1].isdigit():
        raise UnknownIntervalError(token)
    return int(token[:-1])


def schedule_next(
    interval: str, difficulty, ladder: Sequence[str] = REVIEW_LADDER
) -> Optional[str]:
    """Next rung after answering a review at `interval`, or None when the cycle ends."""
    try:
        current_index = ladder.index(interval)
    except ValueError:
        raise UnknownIntervalError(interval) from None

    # difficulty is validated earlier
    next_index = max(0, current_index + DIFFICULTY_STEP[Difficulty(difficulty)])
    if next_index >= len(ladder):
        return None
    return ladder[next_index]

"""Points and streak rules applied after each qualifying study action.

A qualifying action is a finished study session or a completed review.
Streaks count calendar days in the active time zone, not 24h windows.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..config import POINTS_PER_ACTION
from ..utils.time import days_between, start_of_day


@dataclass(frozen=True)
class Progress:
    points: int = 0
    weekly_points: int = 0
    current_streak: int = 0
    max_streak: int = 0
    last_study_date: Optional[datetime] = None

    @classmethod
    def from_profile(cls, profile) -> "Progress":
        return cls(
            points=profile.points,
            weekly_points=profile.weekly_points,
            current_streak=profile.current_streak,
            max_streak=profile.max_streak,
            last_study_date=profile.last_study_date,
        )


def next_streak(last_study_date: Optional[datetime], current_streak: int, now: datetime) -> int:
    if last_study_date is None:
        return 1
    gap = days_between(last_study_date, now)
    # a negative gap means the stored day is ahead of ours (time zone change)
    if gap <= 0:
        return current_streak
    if gap == 1:
        return current_streak + 1
    return 1


def apply_study_completion(progress: Progress, now: datetime) -> Progress:
    streak = next_streak(progress.last_study_date, progress.current_streak, now)
    return replace(
        progress,
        points=progress.points + POINTS_PER_ACTION,
        weekly_points=progress.weekly_points + POINTS_PER_ACTION,
        current_streak=streak,
        max_streak=max(progress.max_streak, streak),
        last_study_date=start_of_day(now),
    )


def compute_display_streak(
    last_study_date: Optional[datetime], stored_streak: int, today: datetime
) -> int:
    """Streak to show without writing: zero once a whole day was missed."""
    if last_study_date is None:
        return 0
    if days_between(last_study_date, today) <= 1:
        return stored_streak
    return 0


def weekly_record(weekly_points: int, max_weekly_points: int) -> int:
    return max(weekly_points, max_weekly_points)

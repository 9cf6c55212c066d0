from django.db import transaction
from django.utils import timezone
import structlog
from ..data.repos import ensure_profile, get_profile_for_update
from ..domain import gamification
from ..utils.time import to_local_iso

logger = structlog.get_logger()


def apply_study_completion(user_id, now=None):
    """Award points and advance the streak for one qualifying action."""
    now = now or timezone.now()
    with transaction.atomic():
        profile = get_profile_for_update(user_id)
        before = gamification.Progress.from_profile(profile)
        after = gamification.apply_study_completion(before, now)

        profile.points = after.points
        profile.weekly_points = after.weekly_points
        profile.current_streak = after.current_streak
        profile.max_streak = after.max_streak
        profile.last_study_date = after.last_study_date
        profile.save(update_fields=[
            "points", "weekly_points", "current_streak", "max_streak", "last_study_date",
        ])

    logger.info("progress_updated",
        user_id=str(user_id),
        points=after.points,
        weekly_points=after.weekly_points,
        streak_before=before.current_streak,
        streak=after.current_streak,
        max_streak=after.max_streak,
        last_study_date=to_local_iso(after.last_study_date),
    )
    return profile


def check_and_update_weekly_points_record(user_id):
    with transaction.atomic():
        profile = get_profile_for_update(user_id)
        record = gamification.weekly_record(profile.weekly_points, profile.max_weekly_points)
        if record != profile.max_weekly_points:
            logger.info("weekly_record_updated",
                user_id=str(user_id),
                previous=profile.max_weekly_points,
                record=record,
            )
            profile.max_weekly_points = record
            profile.save(update_fields=["max_weekly_points"])
    return profile


def display_streak(profile, today=None):
    return gamification.compute_display_streak(
        profile.last_study_date, profile.current_streak, today or timezone.now()
    )


def best_weekly_points(profile):
    return gamification.weekly_record(profile.weekly_points, profile.max_weekly_points)


def get_profile(user_id):
    return ensure_profile(user_id)

"""Points, streak and weekly record rules."""
import pytest
import logging
from datetime import datetime, timedelta, timezone as dt_tz
from django.urls import reverse

from tracker.data.models import UserProfile
from tracker.domain.gamification import (
    Progress,
    apply_study_completion,
    compute_display_streak,
    next_streak,
)
from tracker.services import gamification

logger = logging.getLogger(__name__)

NOW = datetime(2025, 3, 10, 15, 30, tzinfo=dt_tz.utc)


class TestStudyCompletion:
    def test_first_action_starts_streak_at_one(self):
        result = apply_study_completion(Progress(current_streak=7, max_streak=9), NOW)

        assert result.current_streak == 1
        assert result.max_streak == 9
        assert result.points == 10
        assert result.weekly_points == 10

    def test_yesterday_extends_streak(self):
        before = Progress(current_streak=4, max_streak=4, last_study_date=NOW - timedelta(days=1))

        result = apply_study_completion(before, NOW)

        assert result.current_streak == 5
        assert result.max_streak == 5

    def test_late_yesterday_still_counts_as_yesterday(self):
        last = datetime(2025, 3, 9, 23, 59, tzinfo=dt_tz.utc)
        early = datetime(2025, 3, 10, 0, 1, tzinfo=dt_tz.utc)

        assert next_streak(last, 2, early) == 3

    def test_stored_day_ahead_of_now_keeps_streak(self):
        assert next_streak(NOW + timedelta(days=1), 4, NOW) == 4

    def test_same_day_keeps_streak_but_adds_points(self):
        first = apply_study_completion(
            Progress(current_streak=3, last_study_date=NOW - timedelta(days=1)), NOW
        )
        second = apply_study_completion(first, NOW + timedelta(hours=2))

        assert first.current_streak == second.current_streak == 4
        assert second.points == first.points + 10
        assert second.weekly_points == first.weekly_points + 10

    def test_gap_resets_streak_to_one(self):
        before = Progress(current_streak=12, max_streak=12, last_study_date=NOW - timedelta(days=2))

        result = apply_study_completion(before, NOW)

        assert result.current_streak == 1
        assert result.max_streak == 12

    def test_last_study_date_is_start_of_day(self):
        result = apply_study_completion(Progress(), NOW)

        assert result.last_study_date == datetime(2025, 3, 10, tzinfo=dt_tz.utc)

    def test_input_is_not_mutated(self):
        before = Progress(points=50)

        apply_study_completion(before, NOW)

        assert before.points == 50

    def test_max_streak_never_decreases(self):
        progress = Progress()
        days = [0, 1, 2, 5, 6, 6, 20, 21, 22, 23]
        best = 0
        for offset in days:
            progress = apply_study_completion(progress, NOW + timedelta(days=offset))
            assert progress.max_streak >= best
            best = progress.max_streak
        assert best == 4


class TestDisplayStreak:
    def test_never_studied_shows_zero(self):
        assert compute_display_streak(None, 5, NOW) == 0

    def test_yesterday_shows_stored_streak(self):
        assert compute_display_streak(NOW - timedelta(days=1), 5, NOW) == 5

    def test_today_shows_stored_streak(self):
        assert compute_display_streak(NOW, 5, NOW) == 5

    def test_two_days_ago_shows_zero(self):
        assert compute_display_streak(NOW - timedelta(days=2), 5, NOW) == 0


@pytest.mark.django_db
class TestProfileUpdates:
    def test_profile_is_created_lazily(self, user):
        assert not UserProfile.objects.filter(id=user.id).exists()

        profile = gamification.apply_study_completion(user.id, NOW)

        assert profile.points == 10
        assert profile.current_streak == 1
        assert UserProfile.objects.filter(id=user.id).count() == 1

    def test_display_streak_does_not_write(self, user):
        UserProfile.objects.create(
            id=user.id, current_streak=5, last_study_date=NOW - timedelta(days=3)
        )
        profile = UserProfile.objects.get(id=user.id)

        assert gamification.display_streak(profile, NOW) == 0
        profile.refresh_from_db()
        assert profile.current_streak == 5

    def test_weekly_record_only_grows(self, user):
        UserProfile.objects.create(id=user.id, weekly_points=70, max_weekly_points=50)

        profile = gamification.check_and_update_weekly_points_record(user.id)
        assert profile.max_weekly_points == 70

        UserProfile.objects.filter(id=user.id).update(weekly_points=0)
        profile = gamification.check_and_update_weekly_points_record(user.id)
        assert profile.max_weekly_points == 70
        assert gamification.best_weekly_points(profile) == 70

    def test_completion_does_not_touch_weekly_record(self, user):
        UserProfile.objects.create(id=user.id, weekly_points=90, max_weekly_points=20)

        profile = gamification.apply_study_completion(user.id, NOW)

        assert profile.weekly_points == 100
        profile.refresh_from_db()
        assert profile.max_weekly_points == 20

    def test_profile_endpoint_shows_display_streak(self, api, user):
        UserProfile.objects.create(
            id=user.id, current_streak=5, last_study_date=datetime.now(dt_tz.utc) - timedelta(days=4)
        )

        data = api.get(reverse("profile")).json()

        assert data["current_streak"] == 5
        assert data["display_streak"] == 0
        logger.info("✓ Passed: stale streak hidden on display")

    def test_weekly_record_endpoint(self, api, user):
        UserProfile.objects.create(id=user.id, weekly_points=30)

        data = api.post(reverse("weekly-record")).json()

        assert data["max_weekly_points"] == 30

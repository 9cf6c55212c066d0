import uuid

from django.db import models
from django.db.models.functions import Greatest, Least
from django.utils import timezone

from ..config import DEFAULT_AVATAR, REVIEW_LADDER
from ..domain.enums import Difficulty, FriendshipStatus, ReviewStatus


class Subject(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField()
    name = models.CharField(max_length=100)
    category = models.CharField(max_length=100, blank=True, default="")
    color = models.CharField(max_length=9, default="#000000")  # hex

    class Meta:
        db_table = "subjects"
        indexes = [
            models.Index(fields=["user_id", "name"], name="subjects_user_id_6f2b1c_idx"),
        ]


class StudySession(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField()
    subject_id = models.UUIDField()
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField()
    questions_attempted = models.PositiveIntegerField(null=True, blank=True)
    questions_correct = models.PositiveIntegerField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "study_sessions"
        indexes = [
            models.Index(fields=["user_id", "start_time"], name="study_sessi_user_id_3a9c4e_idx"),
            models.Index(fields=["user_id", "subject_id"], name="study_sessi_user_id_b71d02_idx"),
        ]


class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField()
    session_id = models.UUIDField()
    subject_id = models.UUIDField()
    review_date = models.DateTimeField()  # due at
    status = models.CharField(
        max_length=16, choices=ReviewStatus.choices, default=ReviewStatus.PENDING
    )
    review_interval = models.CharField(max_length=8, default=REVIEW_LADDER[0])
    last_review_difficulty = models.CharField(
        max_length=8, choices=Difficulty.choices, null=True, blank=True
    )

    class Meta:
        db_table = "reviews"
        indexes = [
            models.Index(fields=["user_id", "status", "review_date"], name="reviews_user_id_5e8f1a_idx"),
        ]


class Goal(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField()
    subject_id = models.UUIDField(null=True, blank=True)
    title = models.CharField(max_length=200)
    target_hours = models.FloatField()
    end_date = models.DateTimeField()
    completed = models.BooleanField(default=False)

    class Meta:
        db_table = "goals"
        indexes = [
            models.Index(fields=["user_id", "completed"], name="goals_user_id_0c4d9b_idx"),
        ]


class UserProfile(models.Model):
    # Same value as the owning user's id
    id = models.UUIDField(primary_key=True)
    points = models.PositiveIntegerField(default=0)
    weekly_points = models.PositiveIntegerField(default=0)
    current_streak = models.PositiveIntegerField(default=0)
    max_streak = models.PositiveIntegerField(default=0)
    max_weekly_points = models.PositiveIntegerField(default=0)
    last_study_date = models.DateTimeField(null=True, blank=True)
    selected_avatar = models.CharField(max_length=64, default=DEFAULT_AVATAR)
    display_name = models.CharField(max_length=32, null=True, blank=True, unique=True)

    class Meta:
        db_table = "user_profiles"
        indexes = [
            models.Index(fields=["weekly_points"], name="user_profil_weekly__8d2e6f_idx"),
        ]


class Friendship(models.Model):
    # user_id_1 sent the request, user_id_2 received it
    user_id_1 = models.UUIDField()
    user_id_2 = models.UUIDField()
    status = models.CharField(
        max_length=16, choices=FriendshipStatus.choices, default=FriendshipStatus.PENDING
    )
    action_user_id = models.UUIDField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "friendships"
        unique_together = (("user_id_1", "user_id_2"),)
        # one row per pair whichever side sent the request
        constraints = [
            models.UniqueConstraint(
                Least("user_id_1", "user_id_2"),
                Greatest("user_id_1", "user_id_2"),
                name="friendships_pair_uniq",
            ),
        ]
        indexes = [
            models.Index(fields=["user_id_2", "status"], name="friendships_user_id_a4b7c3_idx"),
        ]


class QuizQuota(models.Model):
    user_id = models.UUIDField()
    day = models.DateField()
    count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "quiz_quotas"
        unique_together = (("user_id", "day"),)

import re

from rest_framework import serializers

from ..config import AVATARS
from ..data.models import Goal, Review, StudySession, Subject, UserProfile
from ..domain.enums import Difficulty, FriendshipStatus
from ..services.gamification import best_weekly_points, display_streak
from ..services.sessions import SESSION_ORDERING
from ..services.social import effective_display_name

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class SubjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subject
        fields = ["id", "user_id", "name", "category", "color"]
        read_only_fields = ["id", "user_id"]

    def validate_color(self, value):
        if not HEX_COLOR.match(value):
            raise serializers.ValidationError("Use a hex color such as #FFAA00.")
        return value.upper()


class GoalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Goal
        fields = ["id", "user_id", "subject_id", "title", "target_hours", "end_date", "completed"]
        read_only_fields = ["id", "user_id"]

    def validate_target_hours(self, value):
        if value <= 0:
            raise serializers.ValidationError("Target hours must be positive.")
        return value


class SessionInSerializer(serializers.Serializer):
    subject_id = serializers.UUIDField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    questions_attempted = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    questions_correct = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SessionQuerySerializer(serializers.Serializer):
    subject_id = serializers.UUIDField(required=False)
    ordering = serializers.ChoiceField(choices=list(SESSION_ORDERING), default="date_desc")


class StudySessionSerializer(serializers.ModelSerializer):
    class Meta:
        model = StudySession
        fields = [
            "id", "user_id", "subject_id", "start_time", "end_time", "duration_minutes",
            "questions_attempted", "questions_correct", "notes",
        ]


class ReviewSerializer(serializers.ModelSerializer):
    class Meta:
        model = Review
        fields = [
            "id", "user_id", "session_id", "subject_id", "review_date", "status",
            "review_interval", "last_review_difficulty",
        ]


class ReviewCompleteSerializer(serializers.Serializer):
    difficulty = serializers.ChoiceField(choices=Difficulty.choices)


class DueQuerySerializer(serializers.Serializer):
    until = serializers.DateTimeField(required=False)  # ISO-8601


class ProfileSerializer(serializers.ModelSerializer):
    display_streak = serializers.SerializerMethodField()
    best_weekly_points = serializers.SerializerMethodField()
    effective_display_name = serializers.SerializerMethodField()

    class Meta:
        model = UserProfile
        fields = [
            "id", "points", "weekly_points", "current_streak", "max_streak",
            "max_weekly_points", "last_study_date", "selected_avatar", "display_name",
            "display_streak", "best_weekly_points", "effective_display_name",
        ]

    def get_display_streak(self, obj):
        return display_streak(obj)

    def get_best_weekly_points(self, obj):
        return best_weekly_points(obj)

    def get_effective_display_name(self, obj):
        return effective_display_name(obj)


class AvatarSerializer(serializers.Serializer):
    selected_avatar = serializers.ChoiceField(choices=AVATARS)


class PublicProfileSerializer(serializers.ModelSerializer):
    display_name = serializers.SerializerMethodField()

    class Meta:
        model = UserProfile
        fields = ["id", "display_name", "selected_avatar", "weekly_points", "points",
                  "current_streak", "max_streak", "max_weekly_points"]

    def get_display_name(self, obj):
        return effective_display_name(obj)


class FriendRequestInSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


class SearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(allow_blank=True)


class SearchResultSerializer(serializers.Serializer):
    profile = PublicProfileSerializer()
    friendship_status = serializers.ChoiceField(
        choices=FriendshipStatus.choices, allow_null=True
    )
    can_send_request = serializers.BooleanField()


class QuizInSerializer(serializers.Serializer):
    subject = serializers.CharField(max_length=200)
    level = serializers.CharField(required=False, allow_blank=True)
    count = serializers.IntegerField(required=False, default=5)

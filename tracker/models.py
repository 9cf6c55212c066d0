from .data.models import (  # noqa: F401
    Friendship,
    Goal,
    QuizQuota,
    Review,
    StudySession,
    Subject,
    UserProfile,
)

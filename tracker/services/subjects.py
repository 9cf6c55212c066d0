from django.db import transaction
from rest_framework.exceptions import NotFound
import structlog
from ..data.models import Goal, Review, StudySession, Subject

logger = structlog.get_logger()


def delete_subject(user_id, subject_id):
    """Delete a subject together with its sessions, reviews and goals."""
    with transaction.atomic():
        subject = Subject.objects.filter(id=subject_id, user_id=user_id).first()
        if subject is None:
            raise NotFound("Subject not found.")
        reviews, _ = Review.objects.filter(user_id=user_id, subject_id=subject.id).delete()
        sessions, _ = StudySession.objects.filter(user_id=user_id, subject_id=subject.id).delete()
        goals, _ = Goal.objects.filter(user_id=user_id, subject_id=subject.id).delete()
        subject.delete()

    logger.info("subject_deleted",
        user_id=str(user_id),
        subject_id=str(subject_id),
        sessions_deleted=sessions,
        reviews_deleted=reviews,
        goals_deleted=goals,
    )


def delete_goal(user_id, goal_id):
    deleted, _ = Goal.objects.filter(id=goal_id, user_id=user_id).delete()
    if not deleted:
        raise NotFound("Goal not found.")
    logger.info("goal_deleted", user_id=str(user_id), goal_id=str(goal_id))

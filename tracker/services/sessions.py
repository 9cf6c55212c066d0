from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError
import structlog
from ..config import REVIEW_LADDER
from ..data.models import Review, StudySession, Subject
from ..data.repos import insert_review
from ..domain.enums import ReviewStatus
from ..domain.logic import interval_days
from ..utils.time import add_days, to_local_iso
from .gamification import apply_study_completion

logger = structlog.get_logger()


def duration_minutes(start_time, end_time) -> int:
    elapsed = (end_time - start_time).total_seconds()
    return max(1, round(elapsed / 60))


def record_study_session(user_id, subject_id, start_time, end_time,
                         questions_attempted=None, questions_correct=None, notes=None, now=None):
    """
    Save a finished study session, queue its first review and award points.
    """
    if not Subject.objects.filter(id=subject_id, user_id=user_id).exists():
        raise NotFound("Subject not found.")
    if end_time < start_time:
        raise ValidationError({"end_time": "End time must not be before start time."})
    if (questions_attempted is not None and questions_correct is not None
            and questions_correct > questions_attempted):
        raise ValidationError(
            {"questions_correct": "Cannot exceed the number of questions attempted."}
        )

    with transaction.atomic():
        session = StudySession.objects.create(
            user_id=user_id,
            subject_id=subject_id,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration_minutes(start_time, end_time),
            questions_attempted=questions_attempted,
            questions_correct=questions_correct,
            notes=(notes or "").strip() or None,
        )
        first_review = insert_review(
            user_id, session.id, subject_id,
            add_days(start_time, interval_days(REVIEW_LADDER[0])),
            REVIEW_LADDER[0],
        )
        profile = apply_study_completion(user_id, now)

    logger.info("session_recorded",
        user_id=str(user_id),
        session_id=str(session.id),
        subject_id=str(subject_id),
        duration_minutes=session.duration_minutes,
        first_review_local=to_local_iso(first_review.review_date),
    )
    return session, first_review, profile


SESSION_ORDERING = {
    "date_desc": ("-start_time",),
    "date_asc": ("start_time",),
    "duration_desc": ("-duration_minutes", "-start_time"),
    "duration_asc": ("duration_minutes", "-start_time"),
}


def list_sessions(user_id, subject_id=None, ordering="date_desc"):
    qs = StudySession.objects.filter(user_id=user_id)
    if subject_id is not None:
        qs = qs.filter(subject_id=subject_id)
    return list(qs.order_by(*SESSION_ORDERING[ordering]))


def delete_session(user_id, session_id):
    """
    Delete a session with the reviews still pending for it.
    Completed reviews stay as history. Points already awarded are kept.
    """
    with transaction.atomic():
        session = (StudySession.objects
                   .select_for_update()
                   .filter(id=session_id, user_id=user_id)
                   .first())
        if session is None:
            raise NotFound("Session not found.")
        dropped, _ = Review.objects.filter(
            user_id=user_id, session_id=session.id, status=ReviewStatus.PENDING
        ).delete()
        session.delete()

    logger.info("session_deleted",
        user_id=str(user_id),
        session_id=str(session_id),
        pending_reviews_deleted=dropped,
    )

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound
import structlog
from ..data.models import Review
from ..data.repos import get_review_for_update, insert_review, pending_reviews
from ..domain.enums import Difficulty, ReviewStatus
from ..domain.logic import interval_days, schedule_next
from ..errors import ReviewAlreadyCompleted, UnknownIntervalError
from ..utils.time import add_days, to_local_iso
from .gamification import apply_study_completion

logger = structlog.get_logger()


def schedule_next_review(previous_review, difficulty, now=None):
    """
    Insert the review that follows `previous_review`.
    Returns None when the ladder is exhausted.
    """
    now = now or timezone.now()
    try:
        next_interval = schedule_next(previous_review.review_interval, difficulty)
        if next_interval is None:
            logger.info("review_cycle_finished",
                user_id=str(previous_review.user_id),
                review_id=str(previous_review.id),
                interval=previous_review.review_interval,
            )
            return None
        days = interval_days(next_interval)
    except UnknownIntervalError:
        logger.error("review_interval_unknown",
            user_id=str(previous_review.user_id),
            review_id=str(previous_review.id),
            interval=previous_review.review_interval,
        )
        raise

    review = insert_review(
        previous_review.user_id,
        previous_review.session_id,
        previous_review.subject_id,
        add_days(now, days),
        next_interval,
    )
    logger.info("review_scheduled",
        user_id=str(review.user_id),
        review_id=str(review.id),
        difficulty=str(Difficulty(difficulty)),
        interval=next_interval,
        review_date=review.review_date.isoformat(),
        review_date_local=to_local_iso(review.review_date),
    )
    return review


def complete_review(user_id, review_id, difficulty, now=None):
    """
    Mark a pending review completed, schedule its successor and award points.
    All three writes commit together or not at all.
    """
    now = now or timezone.now()
    logger.info("review_completion_received",
        user_id=str(user_id),
        review_id=str(review_id),
        difficulty=str(difficulty),
    )

    with transaction.atomic():
        # Serialize completion per review
        review = get_review_for_update(user_id, review_id)
        if review is None:
            raise NotFound("Review not found.")
        if review.status == ReviewStatus.COMPLETED:
            raise ReviewAlreadyCompleted()

        review.status = ReviewStatus.COMPLETED
        review.last_review_difficulty = Difficulty(difficulty)
        review.save(update_fields=["status", "last_review_difficulty"])

        next_review = schedule_next_review(review, difficulty, now)
        profile = apply_study_completion(user_id, now)

    return review, next_review, profile


def list_pending_reviews(user_id, until=None):
    return list(pending_reviews(user_id, until))


def delete_review(user_id, review_id):
    deleted, _ = Review.objects.filter(id=review_id, user_id=user_id).delete()
    if not deleted:
        raise NotFound("Review not found.")
    logger.info("review_deleted", user_id=str(user_id), review_id=str(review_id))

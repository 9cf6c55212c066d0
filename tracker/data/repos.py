from django.db import transaction, IntegrityError
from django.db.models import Q

from ..domain.enums import FriendshipStatus, ReviewStatus
from .models import Friendship, QuizQuota, Review, UserProfile


def ensure_profile(user_id):
    """Create the profile row if missing. Safe to call repeatedly."""
    try:
        with transaction.atomic():
            profile, _ = UserProfile.objects.get_or_create(id=user_id)
    except IntegrityError:
        # Created concurrently
        profile = UserProfile.objects.get(id=user_id)
    return profile


def get_profile_for_update(user_id):
    """
    Fetch the profile row and lock it for update to avoid lost
    point/streak updates. Must run inside a transaction.
    """
    ensure_profile(user_id)
    return UserProfile.objects.select_for_update().get(id=user_id)


def get_review_for_update(user_id, review_id):
    return (Review.objects
            .select_for_update()
            .filter(id=review_id, user_id=user_id)
            .first())


def pending_reviews(user_id, until=None):
    qs = Review.objects.filter(user_id=user_id, status=ReviewStatus.PENDING)
    if until is not None:
        qs = qs.filter(review_date__lte=until)
    return qs.order_by("review_date")


def insert_review(user_id, session_id, subject_id, review_date, review_interval):
    return Review.objects.create(
        user_id=user_id, session_id=session_id, subject_id=subject_id,
        review_date=review_date, review_interval=review_interval,
        status=ReviewStatus.PENDING,
    )


def friendship_between(user_a, user_b):
    """Friendship row in either direction, if any."""
    return Friendship.objects.filter(
        Q(user_id_1=user_a, user_id_2=user_b) | Q(user_id_1=user_b, user_id_2=user_a)
    ).first()


def friend_ids(user_id):
    rows = Friendship.objects.filter(
        Q(user_id_1=user_id) | Q(user_id_2=user_id),
        status=FriendshipStatus.ACCEPTED,
    ).values_list("user_id_1", "user_id_2")
    return [b if a == user_id else a for a, b in rows]


def consume_quota(user_id, day, limit):
    """
    Count one use for (user, day) under a row lock.
    Returns False without counting once the limit is reached.
    """
    with transaction.atomic():
        try:
            with transaction.atomic():
                QuizQuota.objects.get_or_create(user_id=user_id, day=day)
        except IntegrityError:
            pass
        quota = (QuizQuota.objects
                 .select_for_update()
                 .get(user_id=user_id, day=day))
        if quota.count >= limit:
            return False
        quota.count += 1
        quota.save(update_fields=["count"])
        return True

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError
import structlog
from ..config import RANKING_LIMIT, SEARCH_LIMIT
from ..data.models import Friendship, UserProfile
from ..data.repos import ensure_profile, friend_ids, friendship_between
from ..domain.enums import FriendshipStatus
from ..errors import FriendshipExists

logger = structlog.get_logger()


def fallback_name(user_id) -> str:
    return f"User {user_id.hex[:8].upper()}"


def effective_display_name(profile) -> str:
    return profile.display_name or fallback_name(profile.id)


def send_friend_request(user_id, target_id):
    if user_id == target_id:
        raise ValidationError("You cannot send a friend request to yourself.")
    if not UserProfile.objects.filter(id=target_id).exists():
        raise NotFound("User not found.")

    now = timezone.now()
    with transaction.atomic():
        # Lock both profiles in id order so crossed requests queue up
        list(UserProfile.objects.select_for_update().filter(id__in=[user_id, target_id]).order_by("id"))
        existing = friendship_between(user_id, target_id)
        if existing is not None:
            if existing.status != FriendshipStatus.DECLINED:
                raise FriendshipExists()
            existing.delete()
        try:
            with transaction.atomic():
                friendship = Friendship.objects.create(
                    user_id_1=user_id, user_id_2=target_id,
                    status=FriendshipStatus.PENDING, action_user_id=user_id,
                    created_at=now, updated_at=now,
                )
        except IntegrityError:
            raise FriendshipExists() from None

    logger.info("friend_request_sent", user_id=str(user_id), target_id=str(target_id))
    return friendship


def _pending_request(from_user_id, to_user_id):
    friendship = (Friendship.objects
                  .select_for_update()
                  .filter(user_id_1=from_user_id, user_id_2=to_user_id,
                          status=FriendshipStatus.PENDING)
                  .first())
    if friendship is None:
        raise NotFound("Friend request not found.")
    return friendship


def accept_friend_request(user_id, from_user_id):
    with transaction.atomic():
        friendship = _pending_request(from_user_id, user_id)
        friendship.status = FriendshipStatus.ACCEPTED
        friendship.action_user_id = user_id
        friendship.updated_at = timezone.now()
        friendship.save(update_fields=["status", "action_user_id", "updated_at"])

    logger.info("friend_request_accepted", user_id=str(user_id), from_user_id=str(from_user_id))
    return friendship


def decline_friend_request(user_id, from_user_id):
    with transaction.atomic():
        _pending_request(from_user_id, user_id).delete()
    logger.info("friend_request_declined", user_id=str(user_id), from_user_id=str(from_user_id))


def remove_friend(user_id, friend_id):
    friendship = friendship_between(user_id, friend_id)
    if friendship is None or friendship.status != FriendshipStatus.ACCEPTED:
        raise NotFound("Friend not found.")
    friendship.delete()
    logger.info("friend_removed", user_id=str(user_id), friend_id=str(friend_id))


def list_friends(user_id):
    return list(UserProfile.objects.filter(id__in=friend_ids(user_id)).order_by("-weekly_points"))


def list_pending_requests(user_id):
    """Incoming requests not yet acted on by `user_id`, with sender profiles."""
    requests = list(
        Friendship.objects
        .filter(user_id_2=user_id, status=FriendshipStatus.PENDING)
        .exclude(action_user_id=user_id)
        .order_by("-created_at")
    )
    senders = UserProfile.objects.in_bulk([f.user_id_1 for f in requests])
    return [(f, senders.get(f.user_id_1)) for f in requests]


def search_users(user_id, term):
    term = (term or "").strip()
    if not term:
        return []

    users = list(
        UserProfile.objects
        .filter(display_name__icontains=term)
        .exclude(id=user_id)
        .order_by("display_name")[:SEARCH_LIMIT]
    )
    results = []
    for user in users:
        friendship = friendship_between(user_id, user.id)
        status = friendship.status if friendship else None
        results.append({
            "profile": user,
            "friendship_status": status,
            "can_send_request": status in (None, FriendshipStatus.DECLINED),
        })
    return results


def weekly_ranking(user_id):
    """Profiles by weekly points and the caller's 1-based position."""
    me = ensure_profile(user_id)
    ranking = list(UserProfile.objects.order_by("-weekly_points", "id")[:RANKING_LIMIT])

    position = next((i + 1 for i, p in enumerate(ranking) if p.id == me.id), None)
    if position is None:
        position = 1 + UserProfile.objects.filter(weekly_points__gt=me.weekly_points).count()
    return ranking, me, position

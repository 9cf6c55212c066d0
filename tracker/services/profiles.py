from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError
import structlog
from ..config import AVATARS, BANNED_NAME_WORDS, DISPLAY_NAME_MAX, DISPLAY_NAME_MIN
from ..data.models import UserProfile
from ..data.repos import ensure_profile
from ..errors import DisplayNameInvalid, DisplayNameTaken

logger = structlog.get_logger()


def validate_display_name(name):
    """Return the trimmed name or raise DisplayNameInvalid."""
    if name is not None and not isinstance(name, str):
        raise DisplayNameInvalid("The name must be text.")
    trimmed = (name or "").strip()
    if not trimmed:
        raise DisplayNameInvalid("The name cannot be empty.")
    if len(trimmed) < DISPLAY_NAME_MIN:
        raise DisplayNameInvalid(f"The name must have at least {DISPLAY_NAME_MIN} characters.")
    if len(trimmed) > DISPLAY_NAME_MAX:
        raise DisplayNameInvalid(f"The name must have at most {DISPLAY_NAME_MAX} characters.")
    if not all(ch.isalnum() or ch.isspace() for ch in trimmed):
        raise DisplayNameInvalid("Use only letters, numbers and spaces.")
    lowered = trimmed.lower()
    if any(word in lowered for word in BANNED_NAME_WORDS):
        raise DisplayNameInvalid("This name is not allowed.")
    return trimmed


def update_display_name(user_id, name):
    display_name = validate_display_name(name)
    taken = (UserProfile.objects
             .filter(display_name__iexact=display_name)
             .exclude(id=user_id)
             .exists())
    if taken:
        raise DisplayNameTaken()

    profile = ensure_profile(user_id)
    profile.display_name = display_name
    try:
        with transaction.atomic():
            profile.save(update_fields=["display_name"])
    except IntegrityError:
        raise DisplayNameTaken() from None

    logger.info("display_name_updated", user_id=str(user_id), display_name=display_name)
    return profile


def update_avatar(user_id, avatar):
    if avatar not in AVATARS:
        raise ValidationError({"selected_avatar": f"Choose one of: {', '.join(AVATARS)}."})
    profile = ensure_profile(user_id)
    profile.selected_avatar = avatar
    profile.save(update_fields=["selected_avatar"])
    logger.info("avatar_updated", user_id=str(user_id), avatar=avatar)
    return profile

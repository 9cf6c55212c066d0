from rest_framework import status
from rest_framework.exceptions import APIException, Throttled, ValidationError


class UnknownIntervalError(Exception):
    """A stored review interval is not a rung of the ladder."""

    def __init__(self, token):
        super().__init__(f"Unknown review interval: {token!r}")
        self.token = token


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state."
    default_code = "conflict"


class ReviewAlreadyCompleted(Conflict):
    default_detail = "This review has already been completed."
    default_code = "review_completed"


class FriendshipExists(Conflict):
    default_detail = "You already have a request or friendship with this user."
    default_code = "friendship_exists"


class DisplayNameTaken(Conflict):
    default_detail = "This display name is already in use."
    default_code = "display_name_taken"


class DisplayNameInvalid(ValidationError):
    default_code = "display_name_invalid"


class RateLimitExceeded(Throttled):
    default_detail = "You reached the daily usage limit. Try again tomorrow."
    default_code = "rate_limited"


class QuizUpstreamError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "The quiz server returned an error."
    default_code = "quiz_upstream"


class QuizDecodeError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Could not read the quiz server response."
    default_code = "quiz_decode"

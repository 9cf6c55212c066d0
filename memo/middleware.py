from django.contrib.auth import login
from django.http import JsonResponse
import structlog

from memo.models import User

logger = structlog.get_logger()

API_PREFIX = "/api"
USER_HEADER = "X-User-NAME"


class MockLoginUserMiddleware:
    """
    Development login: an API caller names itself with the X-User-NAME
    header and is logged in as that user for the request.
    Requests without the header fall through to DRF authentication.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        username = request.headers.get(USER_HEADER) if request.path.startswith(API_PREFIX) else None
        if not username:
            return self.get_response(request)

        user = User.objects.filter(username=username).first()
        if user is None:
            logger.warning("header_login_rejected", username=username, path=request.path)
            return JsonResponse({"error": "User not found or invalid credentials."}, status=401)

        if request.user.is_anonymous or request.user.pk != user.pk:
            login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        structlog.contextvars.bind_contextvars(username=username)
        try:
            return self.get_response(request)
        finally:
            structlog.contextvars.unbind_contextvars("username")

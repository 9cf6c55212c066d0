from rest_framework.authentication import SessionAuthentication, TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """Token auth that accepts `Authorization: Bearer <key>`."""

    keyword = "Bearer"


class HeaderSessionAuthentication(SessionAuthentication):
    """
    Picks up the user logged in by MockLoginUserMiddleware.
    The caller is identified per request by header, so there is no
    browser session to protect with CSRF.
    """

    def enforce_csrf(self, request):
        return

from django.core.management import CommandError, call_command
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
import structlog

from .permissions import DebugOnly

logger = structlog.get_logger()


@api_view(["POST"])
@permission_classes([DebugOnly | IsAdminUser])
def initialize_data(request):
    """Reset the database to the demo data set. Anyone may call it under DEBUG, admins otherwise."""
    file_name = str(request.data.get("file") or "MOCK_DATA.json")
    logger.info("init_data_requested", file=file_name)
    try:
        call_command("init_data", file=file_name)
    except CommandError as exc:
        logger.warning("init_data_rejected", file=file_name, error=str(exc))
        return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    except (OSError, ValueError) as exc:
        logger.exception("init_data_failed", file=file_name)
        return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({"message": f"Data initialized successfully from {file_name}"})


class UserViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]

    @action(detail=False, methods=["get"])
    def me(self, request):
        user = request.user
        if not user.is_authenticated:
            return Response(
                {"error": "User not authenticated"}, status=status.HTTP_401_UNAUTHORIZED
            )
        return Response({"id": str(user.id), "username": user.username})

from django.conf import settings
from rest_framework.permissions import BasePermission


class DebugOnly(BasePermission):
    """Open only while the project runs with DEBUG on."""

    def has_permission(self, request, view):
        return settings.DEBUG

from datetime import datetime, timezone as dt_tz

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from tracker.data.models import Subject

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(db):
    return User.objects.create_user(username="student")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="classmate")


@pytest.fixture
def api(user):
    """API client that authenticates as `user` through the username header."""
    client = APIClient()
    client.credentials(HTTP_X_USER_NAME=user.username)
    return client


@pytest.fixture
def subject(user):
    return Subject.objects.create(user_id=user.id, name="Biology", color="#2E7D32")


@pytest.fixture
def new_year():
    return datetime(2025, 1, 1, 12, 0, tzinfo=dt_tz.utc)

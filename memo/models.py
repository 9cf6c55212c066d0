import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom User model that extends the default Django User model.
    The primary key is a UUID so it can be shared with the tracker tables,
    which reference users by plain UUID columns.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

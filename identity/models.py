import uuid

from django.db import models
from django.contrib.auth.models import User


class Profile(models.Model):
    """Identity-side record for a signed-up user.

    ``subject_id`` is the stable identifier handed out in the ``sub`` claim of
    issued tokens; the application user directory links to it as ``cognitoId``.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, primary_key=True, related_name='identity_profile')
    subject_id = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    is_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Profile for {self.user.username}"

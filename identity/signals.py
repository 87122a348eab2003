import logging

from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_identity_profile(sender, instance, created, **kwargs):
    """Give every newly registered user a subject id"""
    if not created:
        return
    profile, _ = Profile.objects.get_or_create(user=instance)
    logger.info(f"Issued subject id {profile.subject_id} for user {instance.username}")

# it_assets/signals.py
"""
Tạo Profile + role mặc định (employee) khi có user mới.
"""
from __future__ import annotations
import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from it_assets.models import Profile, UserRole

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_profile_for_new_user(sender, instance, created, **kwargs):
    if not created:
        return
    full_name = (instance.get_full_name() or "").strip()
    Profile.objects.get_or_create(
        user=instance,
        defaults={"email": instance.email or "", "full_name": full_name},
    )
    UserRole.objects.get_or_create(user=instance, role=UserRole.Role.EMPLOYEE)
    logger.debug("[profile] created profile for user %s", instance.pk)

"""
accounts/signals.py
───────────────────
Signal receivers, connected in AccountsConfig.ready().

- Every new User gets a StaffProfile with an ``EMP<nnnn>`` employee id.
- Sign-in, sign-out and failed sign-in attempts are logged.
"""

import logging

from django.conf import settings
from django.contrib.auth.signals import user_logged_in, user_logged_out, user_login_failed
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import StaffProfile

logger = logging.getLogger(__name__)


def employee_id_for(user):
    return f"EMP{user.pk:04d}"


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_staff_profile(sender, instance, created, raw=False, **kwargs):
    if not created or raw:
        return
    StaffProfile.objects.get_or_create(
        user=instance,
        defaults={
            'employee_id': employee_id_for(instance),
            'full_name':   instance.get_full_name() or instance.email,
            'email':       instance.email,
        },
    )
    logger.info('Staff profile created for %s', instance.email)


@receiver(user_logged_in)
def log_sign_in(sender, request, user, **kwargs):
    logger.info('User %s signed in', user.email)


@receiver(user_logged_out)
def log_sign_out(sender, request, user, **kwargs):
    if user is not None:
        logger.info('User %s signed out', user.email)


@receiver(user_login_failed)
def log_failed_sign_in(sender, credentials, request=None, **kwargs):
    logger.warning('Failed sign-in for %s', credentials.get('username', '?'))

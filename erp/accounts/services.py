"""
accounts/services.py
────────────────────
Staff account management used by the Staff screen.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from .models import StaffProfile, UserRole

logger = logging.getLogger(__name__)


def set_roles(user, roles):
    """
    Make *user*'s role set exactly *roles*: missing pairs are added,
    extra ones removed, unchanged ones left alone.
    """
    wanted = set(roles)
    current = set(UserRole.objects.filter(user=user).values_list('role', flat=True))
    with transaction.atomic():
        UserRole.objects.filter(user=user, role__in=current - wanted).delete()
        UserRole.objects.bulk_create(
            [UserRole(user=user, role=role) for role in sorted(wanted - current)]
        )
    if wanted != current:
        logger.info('Roles for %s set to %s', user.email, sorted(wanted) or 'none')
    return sorted(wanted)


def create_staff_member(*, email, password, full_name, phone='', designation='',
                        branch=None, roles=()):
    """
    Create a login plus its profile and roles in one transaction and return
    the StaffProfile.
    """
    User = get_user_model()
    first_name, _, last_name = full_name.strip().partition(' ')
    with transaction.atomic():
        user = User.objects.create_user(
            username=email,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name.strip(),
        )
        # post_save has already created the profile
        profile = StaffProfile.objects.get(user=user)
        profile.full_name = full_name.strip()
        profile.phone = phone
        profile.designation = designation
        profile.branch = branch
        profile.save()
        set_roles(user, roles)
    logger.info('Staff member %s (%s) created', profile.employee_id, email)
    return profile

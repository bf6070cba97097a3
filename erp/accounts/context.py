"""
accounts/context.py
───────────────────
Per-request view of "who is logged in and what can they do".

AuthContextMiddleware builds one AuthContext for every request and hangs it
on ``request.auth``; the navigation context processor hands the same object
to templates.  The context holds the user, their StaffProfile and their
role names, and wraps sign-in / sign-up / sign-out so that callers get an
``AuthResult`` back instead of an exception.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.contrib.auth import authenticate, get_user_model, login, logout
from django.db import DatabaseError, IntegrityError, transaction

from .models import StaffProfile, StaffRole, UserRole

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid email or password'
ACCOUNT_DISABLED = 'This account is disabled'
EMAIL_TAKEN = 'This email is already registered'


@dataclass
class AuthResult:
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


# ── Store lookups ─────────────────────────────────────────────────────────────

def fetch_profile(user):
    return StaffProfile.objects.filter(user=user).select_related('branch').first()


def fetch_roles(user):
    return list(UserRole.objects.filter(user=user).values_list('role', flat=True))


# ── Context ───────────────────────────────────────────────────────────────────

class AuthContext:
    """
    Snapshot of the session for one request.

    ``profile`` and ``roles`` are loaded only once a user is authenticated.
    A failing lookup is logged and leaves the value empty; pages keep
    rendering with whatever is known.
    """

    def __init__(self, request):
        self.request = request
        self.profile = None
        self.roles = []
        self.refresh()

    @property
    def user(self):
        return self.request.user

    @property
    def is_authenticated(self):
        return self.user.is_authenticated

    @property
    def is_admin(self):
        """Same rule as accounts.permissions.is_admin: superuser or the admin role."""
        if not self.is_authenticated:
            return False
        return self.user.is_superuser or self.has_role(StaffRole.ADMIN)

    @property
    def display_name(self):
        if self.profile and self.profile.full_name:
            return self.profile.full_name
        return self.user.get_full_name() or self.user.email

    def has_role(self, role):
        return role in self.roles

    def refresh(self):
        """Reload profile and roles for the current user."""
        self.profile = None
        self.roles = []
        if not self.is_authenticated:
            return

        try:
            self.profile = fetch_profile(self.user)
        except DatabaseError:
            logger.exception('Could not load staff profile for user %s', self.user.pk)

        try:
            self.roles = fetch_roles(self.user)
        except DatabaseError:
            logger.exception('Could not load roles for user %s', self.user.pk)

    # ── Session changes ───────────────────────────────────────────────────────

    def sign_in(self, email, password):
        email = (email or '').strip().lower()
        user = authenticate(self.request, username=email, password=password)
        if user is None:
            User = get_user_model()
            candidate = User.objects.filter(email=email).first()
            if candidate is not None and not candidate.is_active and candidate.check_password(password):
                return AuthResult(error=ACCOUNT_DISABLED)
            return AuthResult(error=INVALID_CREDENTIALS)

        login(self.request, user)
        self.refresh()
        return AuthResult()

    def sign_up(self, email, password, full_name):
        """
        Create a login (its StaffProfile follows via post_save) and sign it
        in.  New accounts carry no roles until an admin assigns some.
        """
        User = get_user_model()
        email = (email or '').strip().lower()
        if User.objects.filter(email=email).exists():
            return AuthResult(error=EMAIL_TAKEN)

        first_name, _, last_name = (full_name or '').strip().partition(' ')
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name.strip(),
                )
        except IntegrityError:
            logger.warning('Sign-up raced on an existing e-mail: %s', email)
            return AuthResult(error=EMAIL_TAKEN)

        login(self.request, user, backend='django.contrib.auth.backends.ModelBackend')
        self.refresh()
        logger.info('New account created for %s', email)
        return AuthResult()

    def sign_out(self):
        logout(self.request)
        self.refresh()
        return AuthResult()

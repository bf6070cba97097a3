"""
accounts/permissions.py
───────────────────────
One place that decides who may change what.

Reading any screen only requires a login.  Every mutating view is wrapped
in ``permission_required_for(resource, action)``, which consults
``authorize()``:

- superusers and holders of the ``admin`` role may do anything;
- a user with no roles may change nothing (they still see the full menu);
- otherwise the user needs one of the roles listed in POLICY for the
  (resource, action) pair.
"""

import logging
from functools import wraps

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.http import HttpResponseNotAllowed
from django.shortcuts import redirect

from .models import StaffRole, UserRole

logger = logging.getLogger(__name__)

ADMIN          = StaffRole.ADMIN
BRANCH_MANAGER = StaffRole.BRANCH_MANAGER
TRAINER        = StaffRole.TRAINER
ACCOUNTS       = StaffRole.ACCOUNTS
RECEPTION      = StaffRole.RECEPTION

ACTIONS = ('view', 'add', 'change', 'delete')

_MANAGERS = (ADMIN, BRANCH_MANAGER)
_FRONT_DESK = (ADMIN, BRANCH_MANAGER, RECEPTION)

POLICY = {
    'branches':     {'add': (ADMIN,), 'change': (ADMIN,), 'delete': (ADMIN,)},
    'staff':        {'add': (ADMIN,), 'change': (ADMIN,), 'delete': (ADMIN,)},
    'settings':     {'change': (ADMIN,)},
    'courses':      {'add': _MANAGERS, 'change': _MANAGERS, 'delete': _MANAGERS},
    'batches':      {'add': _MANAGERS, 'change': _MANAGERS, 'delete': _MANAGERS},
    'students':     {'add': _FRONT_DESK, 'change': _FRONT_DESK, 'delete': _MANAGERS},
    'enrollments':  {'add': _FRONT_DESK, 'change': _FRONT_DESK, 'delete': _MANAGERS},
    'attendance':   {'change': (ADMIN, BRANCH_MANAGER, TRAINER)},
    'receipts':     {'add': (ADMIN, BRANCH_MANAGER, ACCOUNTS, RECEPTION),
                     'change': (ADMIN, BRANCH_MANAGER, ACCOUNTS)},
    'certificates': {'add': _MANAGERS, 'change': _MANAGERS},
}

ACCESS_DENIED = 'Access denied – you do not have permission to do that.'


# ── Role helpers ──────────────────────────────────────────────────────────────

def user_roles(user) -> set:
    if user is None or not user.is_authenticated:
        return set()
    return set(UserRole.objects.filter(user=user).values_list('role', flat=True))


def has_role(user, role) -> bool:
    return role in user_roles(user)


def is_admin(user) -> bool:
    if user is None or not user.is_authenticated:
        return False
    return user.is_superuser or has_role(user, ADMIN)


def authorize(user, action, resource, roles=None) -> bool:
    """
    May *user* perform *action* on *resource*?

    *roles* may be passed when the caller already has them (e.g. from
    ``request.auth``) to skip the lookup.
    """
    if user is None or not user.is_authenticated or not user.is_active:
        return False
    if action not in ACTIONS:
        raise ValueError(f"Unknown action: {action!r}")
    if action == 'view':
        return True
    if user.is_superuser:
        return True

    roles = set(user_roles(user) if roles is None else roles)
    if not roles:
        return False
    if ADMIN in roles:
        return True
    allowed = POLICY.get(resource, {}).get(action, ())
    return bool(roles.intersection(allowed))


# ── View decorators ───────────────────────────────────────────────────────────

def permission_required_for(resource, action):
    """
    Decorator: unauthenticated users → login, users failing authorize() →
    dashboard with an error message.
    """
    def decorator(view_fn):
        @wraps(view_fn)
        def wrapper(req, *args, **kwargs):
            if not req.user.is_authenticated:
                return redirect_to_login(req.get_full_path())
            auth = getattr(req, 'auth', None)
            roles = auth.roles if auth is not None else None
            if not authorize(req.user, action, resource, roles=roles):
                logger.warning(
                    'Denied %s on %s for user %s', action, resource, req.user.email,
                )
                messages.error(req, ACCESS_DENIED)
                return redirect('dashboard')
            return view_fn(req, *args, **kwargs)
        return wrapper
    return decorator


def require_POST_or_405(view_fn):
    """Decorator: return 405 for any non-POST request."""
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        if req.method != 'POST':
            return HttpResponseNotAllowed(['POST'])
        return view_fn(req, *args, **kwargs)
    return wrapper

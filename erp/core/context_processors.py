"""
core/context_processors.py
──────────────────────────
Global template context injected into every request.

Registered in settings.py → TEMPLATES[0]['OPTIONS']['context_processors'].
"""

from .menu import build_menu
from .services import INSTITUTE, get_setting


def navigation(request):
    """
    Sidebar sections filtered by the current user's roles, plus the auth
    context itself as ``auth``.  Anonymous requests get empty sections.
    """
    auth = getattr(request, 'auth', None)
    if auth is None or not auth.is_authenticated:
        return {'auth': auth, 'menu': {'main': [], 'admin': []}}
    return {
        'auth': auth,
        'menu': build_menu(auth.roles),
        'current_path': request.path,
    }


def institute(request):
    """Institute name / subtitle for page headers."""
    return {'institute': get_setting(INSTITUTE)}

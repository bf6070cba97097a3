"""
core/menu.py
────────────
Static sidebar definition and the role filter applied to it.

An item is visible when the user holds no roles at all, or holds at least
one of the item's ``allowed_roles``.  Accounts fresh from sign-up (zero
roles) therefore see the whole menu; what they may *change* is decided
separately by accounts.permissions.authorize().
"""

from dataclasses import dataclass
from typing import Iterable

ALL_ROLES = ('admin', 'branch_manager', 'trainer', 'accounts', 'reception')


@dataclass(frozen=True)
class MenuItem:
    label: str
    path: str
    icon: str
    allowed_roles: tuple


MAIN_MENU = (
    MenuItem('Dashboard',    '/dashboard/',    'layout-dashboard', ALL_ROLES),
    MenuItem('Students',     '/students/',     'users',            ('admin', 'branch_manager', 'reception')),
    MenuItem('Courses',      '/courses/',      'book-open',        ('admin', 'branch_manager')),
    MenuItem('Batches',      '/batches/',      'calendar',         ('admin', 'branch_manager', 'trainer')),
    MenuItem('Enrollments',  '/enrollments/',  'graduation-cap',   ('admin', 'branch_manager', 'reception')),
    MenuItem('Attendance',   '/attendance/',   'clipboard-check',  ('admin', 'branch_manager', 'trainer')),
    MenuItem('Receipts',     '/receipts/',     'receipt',          ('admin', 'branch_manager', 'accounts', 'reception')),
    MenuItem('Certificates', '/certificates/', 'award',            ('admin', 'branch_manager')),
    MenuItem('Reports',      '/reports/',      'bar-chart',        ('admin', 'branch_manager')),
)

ADMIN_MENU = (
    MenuItem('Staff',    '/staff/',    'user-cog',  ('admin',)),
    MenuItem('Branches', '/branches/', 'building',  ('admin',)),
    MenuItem('Settings', '/settings/', 'settings',  ('admin',)),
)


def can_see(item: MenuItem, roles: Iterable[str]) -> bool:
    roles = set(roles)
    if not roles:
        return True
    return bool(roles.intersection(item.allowed_roles))


def visible_items(items: Iterable[MenuItem], roles: Iterable[str]) -> list:
    """Return the subset of *items* the holder of *roles* may see, order kept."""
    roles = list(roles)
    return [item for item in items if can_see(item, roles)]


def build_menu(roles: Iterable[str]) -> dict:
    """Both sidebar sections, filtered; the admin section may come back empty."""
    roles = list(roles)
    return {
        'main':  visible_items(MAIN_MENU, roles),
        'admin': visible_items(ADMIN_MENU, roles),
    }

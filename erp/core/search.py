"""
core/search.py
──────────────
Free-text list filtering shared by every CRUD screen.

A row matches when *any* of the configured fields contains the query as a
case-insensitive substring.  An empty / blank query returns the queryset
untouched.
"""

from functools import reduce
from operator import or_

from django.db.models import Q


def search_queryset(queryset, query, fields):
    """
    Narrow *queryset* to rows whose *fields* contain *query*.

    ``fields`` are ORM lookups and may follow relations
    (e.g. ``'student__full_name'``).
    """
    query = (query or '').strip()
    if not query or not fields:
        return queryset
    condition = reduce(or_, (Q(**{f'{field}__icontains': query}) for field in fields))
    return queryset.filter(condition)

"""
core/utils.py
─────────────
Small helpers shared by the view modules of every app.
"""

import logging

from django.contrib import messages
from django.db import DatabaseError
from django.db.models import ProtectedError

from .errors import friendly_error

logger = logging.getLogger(__name__)


def add_form_control_class(form):
    """Inject a uniform CSS class onto every visible widget."""
    for field in form.fields.values():
        field.widget.attrs.setdefault('class', 'form-control-input')
    return form


def search_term(req):
    """The free-text ``?q=`` value of a list screen, stripped."""
    return req.GET.get('q', '').strip()


def delete_with_feedback(req, obj, label):
    """
    Delete *obj* and flash the outcome.  Returns True on success.

    Rows still referenced through a PROTECT foreign key are reported, not
    raised.
    """
    try:
        obj.delete()
    except ProtectedError:
        messages.error(req, f'{label} is still used by other records and cannot be deleted.')
        return False
    except DatabaseError as exc:
        logger.exception('Failed to delete %s', label)
        messages.error(req, friendly_error(exc, f'Could not delete {label}.'))
        return False
    messages.success(req, f'{label} deleted.')
    return True

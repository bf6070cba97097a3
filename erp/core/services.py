"""
core/services.py
────────────────
Key-value settings store.

Settings are JSON blobs keyed by (branch, setting_key).  Reads merge the
stored blob over built-in defaults so callers never have to handle a
missing key; writes are a single atomic upsert.
"""

import logging

from django.db import transaction

from .models import Setting

logger = logging.getLogger(__name__)

INSTITUTE = 'institute'
RECEIPT = 'receipt'
CERTIFICATE = 'certificate'

DEFAULTS = {
    INSTITUTE: {
        'name':     'GANISHKA TECHNOLOGY',
        'subtitle': 'Tech Coaching Institute',
        'address':  '',
        'phone':    '',
        'email':    '',
    },
    RECEIPT: {
        'prefix':        'RCP',
        'academy_name':  'GANISHKA ACADEMY',
        'academy_subtitle': 'Education Institute',
        'footer_note':   'Thank you for your payment!',
    },
    CERTIFICATE: {
        'prefix':          'CERT',
        'left_signatory':  'Director',
        'right_signatory': 'Course Coordinator',
    },
}


def get_setting(key, branch=None):
    """
    Return the value stored under *key* merged over its defaults.

    A branch-specific row wins over the global row; a missing row falls
    back to the global one and finally to DEFAULTS.
    """
    row = None
    if branch is not None:
        row = Setting.objects.filter(setting_key=key, branch=branch).first()
    if row is None:
        row = Setting.objects.filter(setting_key=key, branch__isnull=True).first()

    value = dict(DEFAULTS.get(key, {}))
    if row is None:
        return value
    if not isinstance(row.setting_value, dict):
        return row.setting_value
    value.update(row.setting_value)
    return value


def save_setting(key, value, branch=None):
    """
    Insert-or-update the row for (branch, key) in one transaction.

    update_or_create locks the existing row; when two first-time saves race,
    the loser's INSERT trips the unique constraint and it re-reads and
    updates the winner's row instead of creating a duplicate.
    """
    with transaction.atomic():
        setting, created = Setting.objects.update_or_create(
            branch=branch,
            setting_key=key,
            defaults={'setting_value': value},
        )
    logger.info(
        'Setting %s %s for %s',
        key, 'created' if created else 'updated', branch.code if branch else 'global',
    )
    return setting

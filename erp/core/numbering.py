"""
core/numbering.py
─────────────────
Server-side generators for receipt and certificate numbers.

Numbers look like ``<PREFIX>-<YYYY>-<NNNN>`` (e.g. ``RCP-2026-0042``); the
counter restarts every calendar year.  Views never compose a number
themselves: they call one of the two public generators and store exactly
what it returns.
"""

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .models import DocumentSequence
from .services import CERTIFICATE, RECEIPT, get_setting

logger = logging.getLogger(__name__)


def format_document_number(prefix: str, year: int, value: int) -> str:
    return f"{prefix}-{year}-{str(value).zfill(4)}"


def next_sequence_value(kind: str, year: int) -> int:
    """
    Atomically bump and return the counter for (kind, year).

    The row is locked for the duration of the transaction, so concurrent
    callers are serialised and never see the same value.
    """
    with transaction.atomic():
        sequence, _ = DocumentSequence.objects.select_for_update().get_or_create(
            kind=kind, year=year,
        )
        DocumentSequence.objects.filter(pk=sequence.pk).update(last_value=F('last_value') + 1)
        sequence.refresh_from_db(fields=['last_value'])
    return sequence.last_value


def _generate(kind, setting_key, today=None):
    year = (today or timezone.localdate()).year
    prefix = get_setting(setting_key)['prefix'].strip().upper()
    number = format_document_number(prefix, year, next_sequence_value(kind, year))
    logger.info('Generated %s number %s', kind, number)
    return number


def generate_receipt_number(today=None) -> str:
    return _generate(DocumentSequence.Kind.RECEIPT, RECEIPT, today)


def generate_certificate_number(today=None) -> str:
    return _generate(DocumentSequence.Kind.CERTIFICATE, CERTIFICATE, today)

"""
finances/services.py
────────────────────
Receipt creation and status changes, and the printable receipt record.
"""

import logging

from django.db import transaction

from core.documents import ReceiptData
from core.numbering import generate_receipt_number

from .models import Receipt

logger = logging.getLogger(__name__)


class ReceiptError(Exception):
    """Raised when a receipt cannot change state."""


def create_receipt(receipt, generated_by=None):
    """
    Number and insert an unsaved *receipt*.  The number is always the one
    handed out by generate_receipt_number().
    """
    with transaction.atomic():
        receipt.receipt_number = generate_receipt_number()
        receipt.generated_by = generated_by
        if receipt.branch_id is None and receipt.student.branch_id:
            receipt.branch_id = receipt.student.branch_id
        receipt.save()
    logger.info(
        'Receipt %s for %s: %s via %s',
        receipt.receipt_number, receipt.student.admission_number, receipt.amount, receipt.payment_mode,
    )
    return receipt


def change_receipt_status(receipt, status, reason):
    """Void or refund a valid receipt, recording why."""
    if status not in (Receipt.Status.VOIDED, Receipt.Status.REFUNDED):
        raise ReceiptError('A receipt can only be voided or refunded.')
    if receipt.status != Receipt.Status.VALID:
        raise ReceiptError(f'Receipt is already {receipt.get_status_display().lower()}.')
    receipt.status = status
    receipt.void_reason = reason
    receipt.save(update_fields=['status', 'void_reason', 'updated_at'])
    logger.info('Receipt %s marked %s: %s', receipt.receipt_number, status, reason)
    return receipt


def receipt_document(receipt):
    batch = receipt.enrollment.batch if receipt.enrollment_id else None
    return ReceiptData(
        receipt_number=receipt.receipt_number,
        student_name=receipt.student.full_name,
        admission_number=receipt.student.admission_number,
        amount=receipt.amount,
        payment_mode=receipt.payment_mode,
        payment_date=receipt.payment_date,
        status=receipt.status,
        receipt_type=receipt.receipt_type,
        description=receipt.description,
        batch_name=batch.name if batch else '',
        course_name=batch.course.name if batch else '',
    )

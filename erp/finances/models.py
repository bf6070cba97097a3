"""
finances/models.py
──────────────────
Fee receipts.

Receipt – money received from a student, optionally against one of their
          enrollments.  ``receipt_number`` always comes from
          core.numbering.generate_receipt_number().
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Receipt(models.Model):
    """
    A fee receipt.  Receipts are never edited after creation; a wrong one is
    voided (or marked refunded) with a reason and a new one is generated.
    """

    class PaymentMode(models.TextChoices):
        CASH          = 'cash',          'Cash'
        CARD          = 'card',          'Card'
        UPI           = 'upi',           'UPI'
        BANK_TRANSFER = 'bank_transfer', 'Bank Transfer'
        CHEQUE        = 'cheque',        'Cheque'

    class Status(models.TextChoices):
        VALID    = 'valid',    'Valid'
        VOIDED   = 'voided',   'Voided'
        REFUNDED = 'refunded', 'Refunded'

    class ReceiptType(models.TextChoices):
        GT = 'GT', 'GT – Technology'
        GA = 'GA', 'GA – Academy'

    receipt_number = models.CharField(max_length=40, unique=True, editable=False)
    student = models.ForeignKey(
        'academics.Student',
        on_delete=models.PROTECT,
        related_name='receipts',
    )
    enrollment = models.ForeignKey(
        'academics.Enrollment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='receipts',
    )
    branch = models.ForeignKey(
        'core.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='receipts',
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text='Amount received (₹).',
    )
    payment_mode = models.CharField(
        max_length=20,
        choices=PaymentMode.choices,
        default=PaymentMode.CASH,
    )
    receipt_type = models.CharField(
        max_length=2,
        choices=ReceiptType.choices,
        default=ReceiptType.GA,
    )
    payment_date = models.DateField(default=timezone.localdate)
    description = models.TextField(blank=True)
    remarks = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.VALID,
    )
    void_reason = models.TextField(blank=True)
    generated_by = models.ForeignKey(
        'accounts.StaffProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='receipts_generated',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Receipt'
        verbose_name_plural = 'Receipts'

    def __str__(self):
        return f"{self.receipt_number} – ₹{self.amount} ({self.get_status_display()})"

"""
core/models.py
──────────────
Institute-wide models shared by every other app.

Branch           – top-level grouping; optional on most other records.
Setting          – generic (branch, key) → JSON value store for institute,
                   receipt and certificate configuration.
DocumentSequence – per-year counters behind receipt / certificate numbers.
"""

from django.db import models
from django.db.models import Q


class Branch(models.Model):
    """
    One physical centre of the institute.
    """

    name = models.CharField(max_length=200)
    code = models.CharField(
        max_length=20,
        unique=True,
        help_text='Short unique code, stored upper-case (e.g. "HYD").',
    )
    address = models.TextField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Branch'
        verbose_name_plural = 'Branches'

    def __str__(self):
        return f"{self.name} ({self.code})"


class Setting(models.Model):
    """
    A single configuration blob.

    Rows with ``branch=None`` are institute-wide defaults.  Both the global
    row and each per-branch row are unique per ``setting_key``; the pair of
    partial constraints covers the NULL case that a plain unique_together
    would let through.
    """

    branch = models.ForeignKey(
        Branch,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='settings',
    )
    setting_key = models.CharField(max_length=100)
    setting_value = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['setting_key']
        verbose_name = 'Setting'
        verbose_name_plural = 'Settings'
        constraints = [
            models.UniqueConstraint(
                fields=['branch', 'setting_key'],
                condition=Q(branch__isnull=False),
                name='uq_setting_branch_key',
            ),
            models.UniqueConstraint(
                fields=['setting_key'],
                condition=Q(branch__isnull=True),
                name='uq_setting_global_key',
            ),
        ]

    def __str__(self):
        scope = self.branch.code if self.branch_id else 'global'
        return f"{self.setting_key} [{scope}]"


class DocumentSequence(models.Model):
    """
    Running counter for one document kind within one calendar year.
    Only ever touched through core.numbering under a row lock.
    """

    class Kind(models.TextChoices):
        RECEIPT     = 'receipt',     'Receipt'
        CERTIFICATE = 'certificate', 'Certificate'

    kind = models.CharField(max_length=20, choices=Kind.choices)
    year = models.PositiveIntegerField()
    last_value = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = 'Document Sequence'
        verbose_name_plural = 'Document Sequences'
        constraints = [
            models.UniqueConstraint(fields=['kind', 'year'], name='uq_document_sequence_kind_year'),
        ]

    def __str__(self):
        return f"{self.get_kind_display()} {self.year}: {self.last_value}"

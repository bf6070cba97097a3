"""
core/reports.py
───────────────
Month-bucketed figures for the Reports screen.

Every metric is a single grouped query (``TruncMonth`` + aggregate) over
the whole window; months with no rows are filled with zero afterwards.
"""

import logging
from datetime import date, datetime
from decimal import Decimal

from django.db.models import Count, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from academics.models import Certificate, Enrollment, Student
from finances.models import Receipt

logger = logging.getLogger(__name__)

WINDOW_CHOICES = (6, 12)


def month_window(today: date, months: int) -> list:
    """
    First day of each of the last *months* calendar months, oldest first,
    ending with the month that contains *today*.
    """
    year, month = today.year, today.month
    starts = []
    for _ in range(months):
        starts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


def _as_date(value):
    if isinstance(value, datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    return value


def monthly_totals(queryset, date_field, since, aggregate):
    """
    Group *queryset* by the month of *date_field* (rows on or after *since*)
    and return ``{month_start: value}``.
    """
    lookup = {f'{date_field}__gte': since}
    rows = (
        queryset
        .filter(**lookup)
        .annotate(month=TruncMonth(date_field))
        .values('month')
        .annotate(value=aggregate)
        .order_by('month')
    )
    return {_as_date(row['month']): row['value'] or 0 for row in rows}


def _since(first_month):
    """Lower bound usable for both DateFields and DateTimeFields."""
    return timezone.make_aware(datetime(first_month.year, first_month.month, 1))


def build_report(months=6, today=None):
    """
    Collect the monthly series plus two breakdowns for the selected window.

    Returns a dict with ``rows`` (one per month, oldest first), ``totals``,
    ``by_payment_mode`` and ``by_status``.
    """
    if months not in WINDOW_CHOICES:
        months = WINDOW_CHOICES[0]
    today = today or timezone.localdate()
    window = month_window(today, months)
    first = window[0]

    valid_receipts = Receipt.objects.filter(status=Receipt.Status.VALID)

    revenue      = monthly_totals(valid_receipts, 'payment_date', first, Sum('amount'))
    receipts     = monthly_totals(valid_receipts, 'payment_date', first, Count('id'))
    enrollments  = monthly_totals(Enrollment.objects.all(), 'enrollment_date', first, Count('id'))
    students     = monthly_totals(Student.objects.all(), 'created_at', _since(first), Count('id'))
    certificates = monthly_totals(
        Certificate.objects.filter(status=Certificate.Status.ISSUED), 'issue_date', first, Count('id'),
    )

    rows = [
        {
            'month':        month,
            'label':        month.strftime('%b %Y'),
            'revenue':      Decimal(revenue.get(month, 0)),
            'receipts':     receipts.get(month, 0),
            'enrollments':  enrollments.get(month, 0),
            'students':     students.get(month, 0),
            'certificates': certificates.get(month, 0),
        }
        for month in window
    ]

    by_payment_mode = list(
        valid_receipts
        .filter(payment_date__gte=first)
        .values('payment_mode')
        .annotate(total=Sum('amount'), count=Count('id'))
        .order_by('-total')
    )
    by_status = list(
        Enrollment.objects
        .values('status')
        .annotate(count=Count('id'))
        .order_by('status')
    )

    totals = {
        key: sum(row[key] for row in rows)
        for key in ('revenue', 'receipts', 'enrollments', 'students', 'certificates')
    }
    logger.debug('Built %s-month report starting %s', months, first)

    return {
        'months':          months,
        'rows':            rows,
        'totals':          totals,
        'by_payment_mode': by_payment_mode,
        'by_status':       by_status,
    }

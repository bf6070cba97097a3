"""
academics/views/attendance.py
─────────────────────────────
Daily attendance sheet per batch.

GET  /attendance/?batch=<id>&session_date=<YYYY-MM-DD>  – show the sheet
POST /attendance/save/                                  – replace the day's marks
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone
from django.utils.dateparse import parse_date

from accounts.permissions import authorize, permission_required_for, require_POST_or_405
from core.errors import friendly_error
from core.utils import add_form_control_class

from ..forms import AttendancePickerForm
from ..models import Attendance, Batch
from ..services import attendance_sheet, save_attendance

logger = logging.getLogger(__name__)


def _sheet_url(batch_id, session_date):
    return f"{reverse('attendance')}?batch={batch_id}&session_date={session_date.isoformat()}"


@login_required
def attendance_view(req):
    """Pick a batch and a day; list active enrollments with their current mark."""
    picker = AttendancePickerForm(req.GET if 'batch' in req.GET else None)
    batch = session_date = None
    rows = []

    if picker.is_bound and picker.is_valid():
        batch = picker.cleaned_data['batch']
        session_date = picker.cleaned_data['session_date']
        rows = attendance_sheet(batch, session_date)

    add_form_control_class(picker)
    return render(req, 'academics/attendance.html', {
        'picker':          picker,
        'batch':           batch,
        'session_date':    session_date or timezone.localdate(),
        'rows':            rows,
        'status_choices':  Attendance.Status.choices,
        'can_mark':        authorize(req.user, 'change', 'attendance', roles=req.auth.roles),
    })


@permission_required_for('attendance', 'change')
@require_POST_or_405
def attendance_save_view(req):
    """
    Save the posted sheet.  Each row arrives as ``status_<enrollment id>``
    (and optionally ``remarks_<enrollment id>``).
    """
    batch_id = req.POST.get('batch', '')
    if not batch_id.isdigit():
        messages.error(req, 'Please choose a batch.')
        return redirect('attendance')
    batch = get_object_or_404(Batch, pk=int(batch_id))
    try:
        session_date = parse_date(req.POST.get('session_date', '') or '')
    except ValueError:
        session_date = None
    if session_date is None:
        messages.error(req, 'Please choose a valid date.')
        return redirect('attendance')

    marks = {}
    for key, status in req.POST.items():
        if not key.startswith('status_'):
            continue
        enrollment_id = key.removeprefix('status_')
        if enrollment_id.isdigit():
            marks[int(enrollment_id)] = (status, req.POST.get(f'remarks_{enrollment_id}', '').strip())

    try:
        created, updated, deleted = save_attendance(
            batch, session_date, marks, marked_by=req.auth.profile,
        )
    except ValueError as exc:
        messages.error(req, str(exc))
    except DatabaseError as exc:
        logger.exception('Saving attendance for %s on %s failed', batch.code, session_date)
        messages.error(req, friendly_error(exc, 'Could not save attendance.'))
    else:
        messages.success(
            req, f'Attendance saved for {batch.name} on {session_date:%d %b %Y} '
                 f'({created} new, {updated} changed, {deleted} removed).',
        )
    return redirect(_sheet_url(batch.pk, session_date))

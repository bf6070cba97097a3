"""
academics/views/enrollments.py
──────────────────────────────
Enrollment list / create / edit / status change / delete.

A duplicate (student, batch) pair is normally caught by form validation;
if two requests race past it, the IntegrityError from the unique
constraint is turned into the same "already enrolled" message.
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError, transaction
from django.shortcuts import get_object_or_404, redirect, render

from accounts.permissions import permission_required_for, require_POST_or_405
from core.search import search_queryset
from core.utils import add_form_control_class, delete_with_feedback, search_term

from ..forms import EnrollmentForm
from ..models import Enrollment
from ..services import enrollment_error, set_enrollment_status

logger = logging.getLogger(__name__)

ENROLLMENT_SEARCH_FIELDS = [
    'student__full_name', 'student__admission_number', 'batch__name', 'batch__code',
]


def _save_enrollment(req, form):
    """Save *form*; on a store error flash the mapped message and return None."""
    try:
        with transaction.atomic():
            enrollment = form.save(commit=False)
            if enrollment.pk is None:
                enrollment.enrolled_by = req.auth.profile
            enrollment.save()
    except DatabaseError as exc:
        logger.warning('Enrollment save failed: %s', exc)
        messages.error(req, enrollment_error(exc))
        return None
    return enrollment


@login_required
def enrollment_list_view(req):
    query = search_term(req)
    status = req.GET.get('status', '')
    enrollments = Enrollment.objects.select_related('student', 'batch', 'batch__course')
    if status in Enrollment.Status.values:
        enrollments = enrollments.filter(status=status)
    enrollments = search_queryset(enrollments, query, ENROLLMENT_SEARCH_FIELDS)
    return render(req, 'academics/enrollment_list.html', {
        'enrollments':     enrollments,
        'query':           query,
        'status':          status,
        'status_choices':  Enrollment.Status.choices,
    })


@permission_required_for('enrollments', 'add')
def enrollment_create_view(req):
    if req.method == 'POST':
        form = EnrollmentForm(req.POST)
        if form.is_valid():
            enrollment = _save_enrollment(req, form)
            if enrollment is not None:
                messages.success(
                    req, f'{enrollment.student.full_name} enrolled in {enrollment.batch.name}.',
                )
                return redirect('enrollment_list')
        else:
            messages.error(req, 'Please fix the errors below.')
    else:
        form = EnrollmentForm(initial={
            'student': req.GET.get('student'),
            'batch':   req.GET.get('batch'),
        })

    add_form_control_class(form)
    return render(req, 'academics/enrollment_form.html', {'form': form, 'is_edit': False})


@permission_required_for('enrollments', 'change')
def enrollment_edit_view(req, enrollment_id):
    enrollment = get_object_or_404(Enrollment.objects.select_related('student', 'batch'), pk=enrollment_id)

    if req.method == 'POST':
        form = EnrollmentForm(req.POST, instance=enrollment)
        if form.is_valid():
            if _save_enrollment(req, form) is not None:
                messages.success(req, 'Enrollment updated.')
                return redirect('enrollment_list')
        else:
            messages.error(req, 'Please fix the errors below.')
    else:
        form = EnrollmentForm(instance=enrollment)

    add_form_control_class(form)
    return render(req, 'academics/enrollment_form.html', {
        'form': form, 'is_edit': True, 'enrollment': enrollment,
    })


@permission_required_for('enrollments', 'change')
@require_POST_or_405
def enrollment_status_view(req, enrollment_id):
    """Mark an enrollment active / completed / dropped / transferred."""
    enrollment = get_object_or_404(Enrollment.objects.select_related('student'), pk=enrollment_id)
    status = req.POST.get('status', '')
    try:
        set_enrollment_status(enrollment, status)
    except ValueError:
        messages.error(req, 'Unknown enrollment status.')
    else:
        messages.success(
            req, f'{enrollment.student.full_name}: marked {enrollment.get_status_display().lower()}.',
        )
    return redirect('enrollment_list')


@permission_required_for('enrollments', 'delete')
@require_POST_or_405
def enrollment_delete_view(req, enrollment_id):
    enrollment = get_object_or_404(Enrollment, pk=enrollment_id)
    delete_with_feedback(req, enrollment, 'Enrollment')
    return redirect('enrollment_list')

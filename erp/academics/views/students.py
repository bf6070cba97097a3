"""
academics/views/students.py
───────────────────────────
Student list / create / edit / delete.
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render

from accounts.permissions import permission_required_for, require_POST_or_405
from core.errors import friendly_error
from core.search import search_queryset
from core.utils import add_form_control_class, delete_with_feedback, search_term

from ..forms import StudentForm
from ..models import Student
from ..services import save_new_student

logger = logging.getLogger(__name__)

STUDENT_SEARCH_FIELDS = ['full_name', 'admission_number', 'phone', 'email']


@login_required
def student_list_view(req):
    query = search_term(req)
    students = search_queryset(
        Student.objects.select_related('branch'), query, STUDENT_SEARCH_FIELDS,
    )
    return render(req, 'academics/student_list.html', {'students': students, 'query': query})


@permission_required_for('students', 'add')
def student_create_view(req):
    """New student; the admission number is generated on save."""
    if req.method == 'POST':
        form = StudentForm(req.POST)
        if form.is_valid():
            try:
                student = save_new_student(form.save(commit=False))
            except DatabaseError as exc:
                logger.exception('Failed to create student')
                messages.error(req, friendly_error(exc, 'Could not save student.'))
            else:
                messages.success(req, f'Student "{student.full_name}" added as {student.admission_number}.')
                return redirect('student_list')
        else:
            messages.error(req, 'Please fix the errors below.')
    else:
        form = StudentForm()

    add_form_control_class(form)
    return render(req, 'academics/student_form.html', {'form': form, 'is_edit': False})


@permission_required_for('students', 'change')
def student_edit_view(req, student_id):
    student = get_object_or_404(Student, pk=student_id)

    if req.method == 'POST':
        form = StudentForm(req.POST, instance=student)
        if form.is_valid():
            form.save()
            messages.success(req, f'Student "{student.full_name}" updated.')
            return redirect('student_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = StudentForm(instance=student)

    add_form_control_class(form)
    return render(req, 'academics/student_form.html', {'form': form, 'is_edit': True, 'student': student})


@permission_required_for('students', 'delete')
@require_POST_or_405
def student_delete_view(req, student_id):
    student = get_object_or_404(Student, pk=student_id)
    delete_with_feedback(req, student, f'Student "{student.full_name}"')
    return redirect('student_list')

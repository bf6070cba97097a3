"""
academics/views/courses.py
──────────────────────────
Course list / create / edit / delete.  Codes are stored upper-case.
"""

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Count
from django.shortcuts import get_object_or_404, redirect, render

from accounts.permissions import permission_required_for, require_POST_or_405
from core.search import search_queryset
from core.utils import add_form_control_class, delete_with_feedback, search_term

from ..forms import CourseForm
from ..models import Course


@login_required
def course_list_view(req):
    query = search_term(req)
    courses = (
        Course.objects
        .select_related('branch')
        .annotate(batch_count=Count('batches'))
    )
    courses = search_queryset(courses, query, ['name', 'code'])
    return render(req, 'academics/course_list.html', {'courses': courses, 'query': query})


@permission_required_for('courses', 'add')
def course_create_view(req):
    if req.method == 'POST':
        form = CourseForm(req.POST)
        if form.is_valid():
            course = form.save()
            messages.success(req, f'Course "{course.name}" created.')
            return redirect('course_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = CourseForm()

    add_form_control_class(form)
    return render(req, 'academics/course_form.html', {'form': form, 'is_edit': False})


@permission_required_for('courses', 'change')
def course_edit_view(req, course_id):
    course = get_object_or_404(Course, pk=course_id)

    if req.method == 'POST':
        form = CourseForm(req.POST, instance=course)
        if form.is_valid():
            form.save()
            messages.success(req, f'Course "{course.name}" updated.')
            return redirect('course_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = CourseForm(instance=course)

    add_form_control_class(form)
    return render(req, 'academics/course_form.html', {'form': form, 'is_edit': True, 'course': course})


@permission_required_for('courses', 'delete')
@require_POST_or_405
def course_delete_view(req, course_id):
    course = get_object_or_404(Course, pk=course_id)
    delete_with_feedback(req, course, f'Course "{course.name}"')
    return redirect('course_list')

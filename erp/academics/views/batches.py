"""
academics/views/batches.py
──────────────────────────
Batch list / create / edit / delete.
"""

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404, redirect, render

from accounts.permissions import permission_required_for, require_POST_or_405
from core.search import search_queryset
from core.utils import add_form_control_class, delete_with_feedback, search_term

from ..forms import BatchForm
from ..models import Batch, Enrollment


@login_required
def batch_list_view(req):
    """Batches joined with course and trainer; shows active enrollment count vs capacity."""
    query = search_term(req)
    batches = (
        Batch.objects
        .select_related('course', 'trainer', 'branch')
        .annotate(active_count=Count(
            'enrollments', filter=Q(enrollments__status=Enrollment.Status.ACTIVE),
        ))
    )
    batches = search_queryset(batches, query, ['name', 'code'])
    return render(req, 'academics/batch_list.html', {'batches': batches, 'query': query})


@permission_required_for('batches', 'add')
def batch_create_view(req):
    if req.method == 'POST':
        form = BatchForm(req.POST)
        if form.is_valid():
            batch = form.save()
            messages.success(req, f'Batch "{batch.name}" created.')
            return redirect('batch_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = BatchForm()

    add_form_control_class(form)
    return render(req, 'academics/batch_form.html', {'form': form, 'is_edit': False})


@permission_required_for('batches', 'change')
def batch_edit_view(req, batch_id):
    batch = get_object_or_404(Batch, pk=batch_id)

    if req.method == 'POST':
        form = BatchForm(req.POST, instance=batch)
        if form.is_valid():
            form.save()
            messages.success(req, f'Batch "{batch.name}" updated.')
            return redirect('batch_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = BatchForm(instance=batch)

    add_form_control_class(form)
    return render(req, 'academics/batch_form.html', {'form': form, 'is_edit': True, 'batch': batch})


@permission_required_for('batches', 'delete')
@require_POST_or_405
def batch_delete_view(req, batch_id):
    batch = get_object_or_404(Batch, pk=batch_id)
    delete_with_feedback(req, batch, f'Batch "{batch.name}"')
    return redirect('batch_list')

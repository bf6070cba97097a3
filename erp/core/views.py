"""
core/views.py
─────────────
Dashboard, reports, branches and the settings screen.
Custom error handlers (404 / 500) are registered in erp/urls.py.
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.db.models import Count
from django.http import HttpResponseServerError
from django.shortcuts import get_object_or_404, redirect, render
from django.template.loader import render_to_string

from academics.models import Batch, Certificate, Course, Enrollment, Student
from accounts.permissions import ACCESS_DENIED, authorize, permission_required_for, require_POST_or_405
from finances.models import Receipt

from .errors import friendly_error
from .forms import BranchForm, CertificateSettingsForm, InstituteSettingsForm, ReceiptSettingsForm
from .menu import MAIN_MENU, visible_items
from .models import Branch
from .reports import WINDOW_CHOICES, build_report
from .search import search_queryset
from .services import CERTIFICATE, INSTITUTE, RECEIPT, get_setting, save_setting
from .utils import add_form_control_class, delete_with_feedback, search_term

logger = logging.getLogger(__name__)

SETTINGS_FORMS = {
    INSTITUTE:   InstituteSettingsForm,
    RECEIPT:     ReceiptSettingsForm,
    CERTIFICATE: CertificateSettingsForm,
}


def home_view(req):
    """``/`` – everyone goes to the dashboard; the login guard does the rest."""
    return redirect('dashboard')


# ── Dashboard ─────────────────────────────────────────────────────────────────

@login_required
def dashboard_view(req):
    """Headline counts, latest receipts and quick links for the user's roles."""
    stats = [
        ('Active Students',    Student.objects.filter(is_active=True).count()),
        ('Active Courses',     Course.objects.filter(is_active=True).count()),
        ('Active Batches',     Batch.objects.filter(is_active=True).count()),
        ('Active Enrollments', Enrollment.objects.filter(status=Enrollment.Status.ACTIVE).count()),
        ('Valid Receipts',     Receipt.objects.filter(status=Receipt.Status.VALID).count()),
        ('Certificates',       Certificate.objects.filter(status=Certificate.Status.ISSUED).count()),
    ]
    recent_receipts = (
        Receipt.objects
        .select_related('student')
        .order_by('-created_at')[:5]
    )
    quick_links = [item for item in visible_items(MAIN_MENU, req.auth.roles) if item.path != '/dashboard/']

    return render(req, 'core/dashboard.html', {
        'stats':           stats,
        'recent_receipts': recent_receipts,
        'quick_links':     quick_links,
        'no_roles':        not req.auth.roles,
    })


# ── Reports ───────────────────────────────────────────────────────────────────

@login_required
def reports_view(req):
    try:
        months = int(req.GET.get('months', WINDOW_CHOICES[0]))
    except ValueError:
        months = WINDOW_CHOICES[0]
    report = build_report(months)
    peak = max((row['revenue'] for row in report['rows']), default=0) or 1
    for row in report['rows']:
        row['bar'] = int(row['revenue'] * 100 / peak)
    return render(req, 'core/reports.html', {
        'report':         report,
        'window_choices': WINDOW_CHOICES,
    })


# ── Branches ──────────────────────────────────────────────────────────────────

@login_required
def branch_list_view(req):
    query = search_term(req)
    branches = Branch.objects.annotate(student_count=Count('students'))
    branches = search_queryset(branches, query, ['name', 'code'])
    return render(req, 'core/branch_list.html', {'branches': branches, 'query': query})


@permission_required_for('branches', 'add')
def branch_create_view(req):
    if req.method == 'POST':
        form = BranchForm(req.POST)
        if form.is_valid():
            branch = form.save()
            messages.success(req, f'Branch "{branch.name}" created.')
            return redirect('branch_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = BranchForm()

    add_form_control_class(form)
    return render(req, 'core/branch_form.html', {'form': form, 'is_edit': False})


@permission_required_for('branches', 'change')
def branch_edit_view(req, branch_id):
    branch = get_object_or_404(Branch, pk=branch_id)

    if req.method == 'POST':
        form = BranchForm(req.POST, instance=branch)
        if form.is_valid():
            form.save()
            messages.success(req, f'Branch "{branch.name}" updated.')
            return redirect('branch_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = BranchForm(instance=branch)

    add_form_control_class(form)
    return render(req, 'core/branch_form.html', {'form': form, 'is_edit': True, 'branch': branch})


@permission_required_for('branches', 'delete')
@require_POST_or_405
def branch_delete_view(req, branch_id):
    branch = get_object_or_404(Branch, pk=branch_id)
    delete_with_feedback(req, branch, f'Branch "{branch.name}"')
    return redirect('branch_list')


# ── Settings ──────────────────────────────────────────────────────────────────

@login_required
def settings_view(req):
    """
    Institute, receipt and certificate settings on one page.  Each form is
    posted on its own (``section`` field) and saved as one JSON row.
    """
    forms = {key: form_class(initial=get_setting(key)) for key, form_class in SETTINGS_FORMS.items()}

    if req.method == 'POST':
        if not authorize(req.user, 'change', 'settings', roles=req.auth.roles):
            messages.error(req, ACCESS_DENIED)
            return redirect('settings')

        section = req.POST.get('section')
        if section not in SETTINGS_FORMS:
            messages.error(req, 'Unknown settings section.')
            return redirect('settings')

        form = SETTINGS_FORMS[section](req.POST)
        forms[section] = form
        if form.is_valid():
            value = dict(form.cleaned_data)
            if 'prefix' in value:
                value['prefix'] = value['prefix'].upper()
            try:
                save_setting(section, value)
            except DatabaseError as exc:
                logger.exception('Saving %s settings failed', section)
                messages.error(req, friendly_error(exc, 'Could not save settings.'))
            else:
                messages.success(req, 'Settings saved.')
                return redirect('settings')
        else:
            messages.error(req, 'Please fix the errors below.')

    for form in forms.values():
        add_form_control_class(form)
    return render(req, 'core/settings.html', {
        'institute_form':   forms[INSTITUTE],
        'receipt_form':     forms[RECEIPT],
        'certificate_form': forms[CERTIFICATE],
        'can_edit':         authorize(req.user, 'change', 'settings', roles=req.auth.roles),
    })


# ── Custom error pages ────────────────────────────────────────────────────────

def handler404(req, exception):
    return render(req, 'core/404.html', status=404)


def handler500(req):
    # no context processors: the database may be what failed
    return HttpResponseServerError(render_to_string('core/500.html'))

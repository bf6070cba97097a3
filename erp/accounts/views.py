"""
accounts/views.py
─────────────────
Authentication, own profile and staff management.

  /auth/             sign-in and sign-up tabs
  /logout/           POST only
  /profile/          own details + new password
  /staff/...         admin staff screen (list open to staff, changes admin-only)

All templates are resolved from accounts/templates/accounts/.
"""

import logging

from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.contrib.auth.forms import SetPasswordForm
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme

from core.errors import friendly_error
from core.search import search_queryset
from core.utils import add_form_control_class, search_term

from .context import EMAIL_TAKEN
from .forms import ProfileForm, SignInForm, SignUpForm, StaffCreateForm, StaffEditForm
from .models import StaffProfile
from .permissions import permission_required_for, require_POST_or_405
from .services import create_staff_member, set_roles
from .signals import employee_id_for

logger = logging.getLogger(__name__)

SIGN_UP_DONE = 'Account created! Please contact admin for role assignment.'


def _safe_next(req):
    next_url = req.POST.get('next') or req.GET.get('next') or ''
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={req.get_host()}, require_https=req.is_secure(),
    ):
        return next_url
    return 'dashboard'


# ── Sign in / sign up / sign out ──────────────────────────────────────────────

def auth_view(req):
    """
    Both auth forms on one screen.  The submitted ``action`` field says
    which one was posted; the other is rendered unbound.
    """
    if req.user.is_authenticated:
        return redirect('dashboard')

    active_tab = 'signup' if req.GET.get('tab') == 'signup' else 'signin'
    sign_in_form = SignInForm()
    sign_up_form = SignUpForm()

    if req.method == 'POST':
        if req.POST.get('action') == 'signup':
            active_tab = 'signup'
            sign_up_form = SignUpForm(req.POST)
            if sign_up_form.is_valid():
                data = sign_up_form.cleaned_data
                result = req.auth.sign_up(data['email'], data['password'], data['full_name'])
                if result.ok:
                    messages.success(req, SIGN_UP_DONE)
                    return redirect('dashboard')
                sign_up_form.add_error('email' if result.error == EMAIL_TAKEN else None, result.error)
            messages.error(req, 'Please fix the errors below.')
        else:
            sign_in_form = SignInForm(req.POST)
            if sign_in_form.is_valid():
                data = sign_in_form.cleaned_data
                result = req.auth.sign_in(data['email'], data['password'])
                if result.ok:
                    messages.success(req, f'Welcome back, {req.auth.display_name}!')
                    return redirect(_safe_next(req))
                messages.error(req, result.error)
            else:
                messages.error(req, 'Please fix the errors below.')

    add_form_control_class(sign_in_form)
    add_form_control_class(sign_up_form)
    return render(req, 'accounts/auth.html', {
        'sign_in_form': sign_in_form,
        'sign_up_form': sign_up_form,
        'active_tab':   active_tab,
        'next':         req.GET.get('next', ''),
    })


@require_POST_or_405
def logout_view(req):
    """Log the current user out – POST only for CSRF safety."""
    req.auth.sign_out()
    messages.info(req, 'You have been logged out.')
    return redirect('login')


# ── Own profile ───────────────────────────────────────────────────────────────

@login_required
def profile_view(req):
    """Edit own name / phone / designation, or set a new password."""
    profile = req.auth.profile
    if profile is None:
        profile, _ = StaffProfile.objects.get_or_create(
            user=req.user,
            defaults={
                'employee_id': employee_id_for(req.user),
                'full_name':   req.user.get_full_name() or req.user.email,
                'email':       req.user.email,
            },
        )

    profile_form = ProfileForm(instance=profile)
    password_form = SetPasswordForm(req.user)

    if req.method == 'POST':
        if req.POST.get('action') == 'password':
            password_form = SetPasswordForm(req.user, req.POST)
            if password_form.is_valid():
                user = password_form.save()
                update_session_auth_hash(req, user)
                messages.success(req, 'Your password was updated successfully.')
                return redirect('profile')
            messages.error(req, 'Please fix the errors below.')
        else:
            profile_form = ProfileForm(req.POST, instance=profile)
            if profile_form.is_valid():
                profile_form.save()
                messages.success(req, 'Profile updated.')
                return redirect('profile')
            messages.error(req, 'Please fix the errors below.')

    add_form_control_class(profile_form)
    add_form_control_class(password_form)
    return render(req, 'accounts/profile.html', {
        'profile':       profile,
        'profile_form':  profile_form,
        'password_form': password_form,
    })


# ── Staff screen ──────────────────────────────────────────────────────────────

@login_required
def staff_list_view(req):
    query = search_term(req)
    staff = (
        StaffProfile.objects
        .select_related('user', 'branch')
        .prefetch_related('user__roles')
        .order_by('full_name')
    )
    staff = search_queryset(staff, query, ['full_name', 'email', 'employee_id'])
    return render(req, 'accounts/staff_list.html', {'staff': staff, 'query': query})


@permission_required_for('staff', 'add')
def staff_create_view(req):
    """Create a login, its profile and its roles (admin only)."""
    if req.method == 'POST':
        form = StaffCreateForm(req.POST)
        if form.is_valid():
            data = form.cleaned_data
            try:
                profile = create_staff_member(
                    email=data['email'],
                    password=data['password'],
                    full_name=data['full_name'],
                    phone=data['phone'],
                    designation=data['designation'],
                    branch=data['branch'],
                    roles=data['roles'],
                )
            except DatabaseError as exc:
                logger.exception('Failed to create staff member %s', data['email'])
                messages.error(req, friendly_error(
                    exc, 'Could not create staff member.', duplicate=EMAIL_TAKEN,
                ))
            else:
                messages.success(req, f'Staff member "{profile.full_name}" created.')
                return redirect('staff_list')
        else:
            messages.error(req, 'Please fix the errors below.')
    else:
        form = StaffCreateForm()

    add_form_control_class(form)
    return render(req, 'accounts/staff_form.html', {'form': form, 'is_edit': False})


@permission_required_for('staff', 'change')
def staff_edit_view(req, profile_id):
    profile = get_object_or_404(StaffProfile.objects.select_related('user'), pk=profile_id)

    if req.method == 'POST':
        form = StaffEditForm(req.POST, instance=profile, editor=req.user)
        if form.is_valid():
            profile = form.save()
            user = profile.user
            if user.is_active != profile.is_active:
                user.is_active = profile.is_active
                user.save(update_fields=['is_active'])
            set_roles(user, form.cleaned_data['roles'])
            messages.success(req, f'Staff member "{profile.full_name}" updated.')
            return redirect('staff_list')
        messages.error(req, 'Please fix the errors below.')
    else:
        form = StaffEditForm(instance=profile, editor=req.user)

    add_form_control_class(form)
    return render(req, 'accounts/staff_form.html', {'form': form, 'is_edit': True, 'profile': profile})


@permission_required_for('staff', 'change')
@require_POST_or_405
def staff_toggle_view(req, profile_id):
    """Activate / deactivate a staff member and their login together."""
    profile = get_object_or_404(StaffProfile.objects.select_related('user'), pk=profile_id)
    if profile.user_id == req.user.pk:
        messages.error(req, 'You cannot deactivate your own account.')
        return redirect('staff_list')

    profile.is_active = not profile.is_active
    profile.save(update_fields=['is_active', 'updated_at'])
    profile.user.is_active = profile.is_active
    profile.user.save(update_fields=['is_active'])
    state = 'activated' if profile.is_active else 'deactivated'
    logger.info('Staff member %s %s by %s', profile.employee_id, state, req.user.email)
    messages.success(req, f'{profile.full_name} {state}.')
    return redirect('staff_list')

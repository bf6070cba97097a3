import pytest
from django.contrib.auth import get_user_model

from accounts.models import StaffProfile, UserRole
from accounts.services import set_roles

from .conftest import PASSWORD


def roles_of(user):
    return sorted(UserRole.objects.filter(user=user).values_list('role', flat=True))


@pytest.mark.django_db
def test_set_roles_adds_and_removes(make_user):
    user = make_user(roles=['trainer', 'reception'])
    assert set_roles(user, ['trainer', 'accounts']) == ['accounts', 'trainer']
    assert roles_of(user) == ['accounts', 'trainer']
    assert set_roles(user, []) == []
    assert roles_of(user) == []


@pytest.mark.django_db
def test_admin_creates_staff_member(admin_client, branch):
    response = admin_client.post('/staff/new/', {
        'full_name':   'Kiran Shah',
        'email':       'Kiran@Example.com',
        'password':    PASSWORD,
        'phone':       '9000011111',
        'designation': 'Trainer',
        'branch':      branch.pk,
        'roles':       ['trainer'],
    })
    assert response.status_code == 302

    user = get_user_model().objects.get(email='kiran@example.com')
    profile = StaffProfile.objects.get(user=user)
    assert (profile.full_name, profile.designation, profile.branch) == ('Kiran Shah', 'Trainer', branch)
    assert roles_of(user) == ['trainer']
    assert user.check_password(PASSWORD)


@pytest.mark.django_db
def test_duplicate_staff_email(admin_client, trainer):
    response = admin_client.post('/staff/new/', {
        'full_name': 'Someone Else',
        'email':     trainer.email,
        'password':  PASSWORD,
    })
    assert response.status_code == 200
    assert 'This email is already registered' in response.context['form'].errors['email']


@pytest.mark.django_db
def test_edit_updates_roles(admin_client, trainer):
    profile = trainer.staff_profile
    response = admin_client.post(f'/staff/{profile.pk}/edit/', {
        'full_name':   'Trainer One',
        'phone':       '',
        'designation': 'Lead Trainer',
        'is_active':   'on',
        'roles':       ['trainer', 'branch_manager'],
    })
    assert response.status_code == 302
    assert roles_of(trainer) == ['branch_manager', 'trainer']
    profile.refresh_from_db()
    assert profile.designation == 'Lead Trainer'


@pytest.mark.django_db
def test_toggle_deactivates_login(admin_client, admin_staff, trainer):
    admin_client.post(f'/staff/{trainer.staff_profile.pk}/toggle/')
    trainer.refresh_from_db()
    assert not trainer.is_active
    assert not StaffProfile.objects.get(user=trainer).is_active

    admin_client.post(f'/staff/{admin_staff.staff_profile.pk}/toggle/')
    admin_staff.refresh_from_db()
    assert admin_staff.is_active


@pytest.mark.django_db
def test_non_admin_cannot_create_staff(client, trainer):
    client.force_login(trainer)
    response = client.get('/staff/new/')
    assert response.url == '/dashboard/'


@pytest.mark.django_db
def test_admin_cannot_deactivate_self_through_edit(admin_client, admin_staff):
    profile = admin_staff.staff_profile
    response = admin_client.post(f'/staff/{profile.pk}/edit/', {
        'full_name': 'Asha Rao',
        'roles':     ['admin'],
    })
    assert response.status_code == 200
    assert 'is_active' in response.context['form'].errors
    admin_staff.refresh_from_db()
    assert admin_staff.is_active
    assert StaffProfile.objects.get(user=admin_staff).is_active


@pytest.mark.django_db
def test_admin_cannot_drop_own_admin_role(admin_client, admin_staff):
    profile = admin_staff.staff_profile
    response = admin_client.post(f'/staff/{profile.pk}/edit/', {
        'full_name': 'Asha Rao',
        'is_active': 'on',
        'roles':     ['trainer'],
    })
    assert response.status_code == 200
    assert 'roles' in response.context['form'].errors
    assert roles_of(admin_staff) == ['admin']


@pytest.mark.django_db
def test_admin_may_remove_admin_role_from_someone_else(admin_client, make_user):
    other = make_user('second-admin@example.com', roles=['admin'])
    response = admin_client.post(f'/staff/{other.staff_profile.pk}/edit/', {
        'full_name': 'Second Admin',
        'roles':     ['trainer'],
    })
    assert response.status_code == 302
    assert roles_of(other) == ['trainer']
    other.refresh_from_db()
    assert not other.is_active

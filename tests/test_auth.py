import pytest
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.db import DatabaseError

from accounts.context import ACCOUNT_DISABLED, EMAIL_TAKEN, INVALID_CREDENTIALS
from accounts.models import StaffProfile, UserRole
from accounts.permissions import is_admin

from .conftest import PASSWORD


def flashed(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


def sign_up_payload(**overrides):
    payload = {
        'action':           'signup',
        'full_name':        'Meera Iyer',
        'email':            'Meera@Example.com',
        'password':         PASSWORD,
        'confirm_password': PASSWORD,
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
def test_sign_up_creates_profile_without_roles(client):
    response = client.post('/auth/', sign_up_payload())
    assert response.status_code == 302
    assert response.url == '/dashboard/'

    user = get_user_model().objects.get(email='meera@example.com')
    profile = StaffProfile.objects.get(user=user)
    assert profile.full_name == 'Meera Iyer'
    assert profile.employee_id == f'EMP{user.pk:04d}'
    assert not UserRole.objects.filter(user=user).exists()

    dashboard = client.get('/dashboard/')
    assert dashboard.context['auth'].roles == []
    assert dashboard.context['no_roles']


@pytest.mark.django_db
def test_sign_up_with_taken_email(client, make_user):
    make_user('meera@example.com')
    response = client.post('/auth/', sign_up_payload())
    assert response.status_code == 200
    assert EMAIL_TAKEN in response.context['sign_up_form'].errors['email']


@pytest.mark.django_db
def test_sign_up_password_mismatch(client):
    response = client.post('/auth/', sign_up_payload(confirm_password='Something-else9'))
    assert response.status_code == 200
    assert "Passwords don't match" in response.context['sign_up_form'].errors['confirm_password']
    assert response.context['active_tab'] == 'signup'


@pytest.mark.django_db
def test_sign_in_and_out(client, admin_staff):
    response = client.post('/auth/', {'email': 'ADMIN@example.com', 'password': PASSWORD})
    assert response.status_code == 302
    assert response.url == '/dashboard/'
    assert 'Welcome back, Asha Rao!' in flashed(response)

    dashboard = client.get('/dashboard/')
    assert dashboard.context['auth'].is_admin
    assert dashboard.context['auth'].has_role('admin')

    assert client.get('/logout/').status_code == 405
    response = client.post('/logout/')
    assert response.url == '/auth/'
    assert client.get('/dashboard/').status_code == 302


@pytest.mark.django_db
def test_sign_in_follows_safe_next_only(client, admin_staff):
    response = client.post('/auth/?next=/students/', {
        'email': 'admin@example.com', 'password': PASSWORD, 'next': '/students/',
    })
    assert response.url == '/students/'

    client.post('/logout/')
    response = client.post('/auth/', {
        'email': 'admin@example.com', 'password': PASSWORD, 'next': 'https://evil.example/',
    })
    assert response.url == '/dashboard/'


@pytest.mark.django_db
def test_wrong_password(client, admin_staff):
    response = client.post('/auth/', {'email': 'admin@example.com', 'password': 'not-the-one'})
    assert response.status_code == 200
    assert INVALID_CREDENTIALS in flashed(response)


@pytest.mark.django_db
def test_disabled_account(client, make_user):
    make_user('gone@example.com', is_active=False)
    response = client.post('/auth/', {'email': 'gone@example.com', 'password': PASSWORD})
    assert ACCOUNT_DISABLED in flashed(response)


@pytest.mark.django_db
def test_failed_role_lookup_leaves_roles_empty(client, admin_staff, monkeypatch):
    def broken(user):
        raise DatabaseError('connection lost')

    monkeypatch.setattr('accounts.context.fetch_roles', broken)
    client.force_login(admin_staff)
    response = client.get('/dashboard/')
    assert response.status_code == 200
    auth = response.context['auth']
    assert auth.roles == []
    assert auth.profile is not None
    assert not auth.is_admin


@pytest.mark.django_db
def test_failed_profile_lookup_falls_back_to_user_name(client, admin_staff, monkeypatch):
    def broken(user):
        raise DatabaseError('connection lost')

    monkeypatch.setattr('accounts.context.fetch_profile', broken)
    client.force_login(admin_staff)
    auth = client.get('/dashboard/').context['auth']
    assert auth.profile is None
    assert auth.display_name == 'Asha Rao'
    assert auth.roles == ['admin']


@pytest.mark.django_db
def test_profile_update_and_password_change(client, admin_staff):
    client.force_login(admin_staff)
    response = client.post('/profile/', {'full_name': 'Asha R.', 'phone': '9000000000', 'designation': 'Director'})
    assert response.url == '/profile/'
    assert StaffProfile.objects.get(user=admin_staff).full_name == 'Asha R.'

    response = client.post('/profile/', {
        'action':        'password',
        'new_password1': 'Another-Pass42',
        'new_password2': 'Another-Pass42',
    })
    assert response.url == '/profile/'
    admin_staff.refresh_from_db()
    assert admin_staff.check_password('Another-Pass42')
    # still signed in
    assert client.get('/dashboard/').status_code == 200


@pytest.mark.django_db
def test_superuser_without_roles_is_admin_in_context(client, make_user):
    root = make_user('root@example.com', is_superuser=True)
    client.force_login(root)
    auth = client.get('/dashboard/').context['auth']
    assert auth.roles == []
    assert auth.is_admin
    assert is_admin(root)


@pytest.mark.django_db
def test_anonymous_context_is_not_admin(client):
    auth = client.get('/auth/').context['auth']
    assert not auth.is_admin

import pytest
from django.contrib.auth.models import AnonymousUser
from django.contrib.messages import get_messages

from accounts.permissions import ACCESS_DENIED, authorize, has_role, is_admin


@pytest.mark.django_db
def test_view_is_open_to_any_signed_in_user(make_user):
    user = make_user()
    assert authorize(user, 'view', 'receipts')
    assert not authorize(AnonymousUser(), 'view', 'receipts')


@pytest.mark.django_db
def test_zero_roles_may_change_nothing(make_user):
    user = make_user()
    for resource in ('students', 'receipts', 'attendance', 'settings'):
        assert not authorize(user, 'add', resource)
        assert not authorize(user, 'change', resource)


@pytest.mark.django_db
def test_admin_and_superuser_may_do_anything(admin_staff, make_user):
    root = make_user('root@example.com', is_superuser=True)
    for user in (admin_staff, root):
        assert authorize(user, 'delete', 'branches')
        assert authorize(user, 'change', 'settings')
        assert is_admin(user)


@pytest.mark.django_db
@pytest.mark.parametrize('roles, action, resource, expected', [
    (['trainer'],        'change', 'attendance',  True),
    (['trainer'],        'add',    'receipts',    False),
    (['reception'],      'add',    'students',    True),
    (['reception'],      'delete', 'students',    False),
    (['accounts'],       'add',    'receipts',    True),
    (['accounts'],       'change', 'receipts',    True),
    (['reception'],      'change', 'receipts',    False),
    (['branch_manager'], 'add',    'courses',     True),
    (['branch_manager'], 'change', 'settings',    False),
    (['branch_manager'], 'add',    'staff',       False),
])
def test_policy_table(make_user, roles, action, resource, expected):
    user = make_user(roles=roles)
    assert authorize(user, action, resource) is expected


@pytest.mark.django_db
def test_roles_passed_in_skip_the_lookup(make_user, django_assert_num_queries):
    user = make_user()
    with django_assert_num_queries(0):
        assert authorize(user, 'add', 'students', roles=['reception'])


@pytest.mark.django_db
def test_inactive_user_is_refused(make_user):
    user = make_user(roles=['admin'], is_active=False)
    assert not authorize(user, 'change', 'courses')


@pytest.mark.django_db
def test_unknown_action_is_an_error(make_user):
    with pytest.raises(ValueError):
        authorize(make_user(), 'approve', 'receipts')


@pytest.mark.django_db
def test_anonymous_mutation_goes_to_login(client):
    response = client.get('/courses/new/')
    assert response.status_code == 302
    assert response.url == '/auth/?next=/courses/new/'


@pytest.mark.django_db
def test_denied_user_is_sent_to_dashboard(client, trainer):
    client.force_login(trainer)
    response = client.get('/courses/new/')
    assert response.status_code == 302
    assert response.url == '/dashboard/'
    assert ACCESS_DENIED in [str(m) for m in get_messages(response.wsgi_request)]


@pytest.mark.django_db
def test_delete_needs_post(admin_client, course):
    assert admin_client.get(f'/courses/{course.pk}/delete/').status_code == 405


@pytest.mark.django_db
def test_role_helpers(make_user):
    user = make_user(roles=['trainer', 'accounts'])
    assert has_role(user, 'trainer')
    assert not has_role(user, 'admin')
    assert not is_admin(user)
    assert not is_admin(AnonymousUser())

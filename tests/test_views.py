import pytest


@pytest.mark.django_db
@pytest.mark.parametrize('path', ['/dashboard/', '/students/', '/receipts/', '/settings/', '/profile/'])
def test_anonymous_is_sent_to_sign_in(client, path):
    response = client.get(path)
    assert response.status_code == 302
    assert response.url == f'/auth/?next={path}'


@pytest.mark.django_db
def test_root_goes_to_dashboard(client):
    assert client.get('/').url == '/dashboard/'


@pytest.mark.django_db
def test_unknown_page_is_404(admin_client):
    response = admin_client.get('/no-such-page/')
    assert response.status_code == 404
    assert 'core/404.html' in [t.name for t in response.templates]


@pytest.mark.django_db
def test_signed_in_user_skips_auth_page(admin_client):
    assert admin_client.get('/auth/').url == '/dashboard/'


@pytest.mark.django_db
@pytest.mark.parametrize('path', [
    '/dashboard/', '/reports/', '/branches/', '/settings/', '/staff/', '/profile/',
    '/students/', '/courses/', '/batches/', '/enrollments/', '/attendance/',
    '/certificates/', '/receipts/', '/students/new/', '/receipts/new/', '/certificates/issue/',
])
def test_screens_render(admin_client, enrollment, path):
    assert admin_client.get(path).status_code == 200


@pytest.mark.django_db
def test_dashboard_quick_links_follow_roles(client, trainer):
    client.force_login(trainer)
    response = client.get('/dashboard/')
    assert [item.label for item in response.context['quick_links']] == ['Batches', 'Attendance']
    assert [item.label for item in response.context['menu']['main']] == ['Dashboard', 'Batches', 'Attendance']


POPUP_BLOCKED = 'Could not open print window. Please allow popups.'


@pytest.mark.django_db
@pytest.mark.parametrize('path', ['/certificates/', '/receipts/'])
def test_document_lists_carry_popup_blocked_message(admin_client, path):
    content = admin_client.get(path).content.decode()
    assert POPUP_BLOCKED in content
    assert 'function openDocument(url)' in content

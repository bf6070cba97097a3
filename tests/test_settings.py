import pytest

from core.models import Setting
from core.services import CERTIFICATE, DEFAULTS, INSTITUTE, RECEIPT, get_setting, save_setting


@pytest.mark.django_db
def test_missing_setting_falls_back_to_defaults():
    assert get_setting(RECEIPT) == DEFAULTS[RECEIPT]
    assert get_setting('unknown') == {}


@pytest.mark.django_db
def test_save_is_an_upsert():
    save_setting(RECEIPT, {'prefix': 'GTR'})
    save_setting(RECEIPT, {'prefix': 'RCT', 'footer_note': 'Thanks'})

    assert Setting.objects.filter(setting_key=RECEIPT).count() == 1
    value = get_setting(RECEIPT)
    assert value['prefix'] == 'RCT'
    assert value['footer_note'] == 'Thanks'
    assert value['academy_name'] == DEFAULTS[RECEIPT]['academy_name']


@pytest.mark.django_db
def test_branch_row_wins_over_global(branch):
    save_setting(INSTITUTE, {'name': 'Global Name'})
    save_setting(INSTITUTE, {'name': 'Hyderabad Centre'}, branch=branch)

    assert get_setting(INSTITUTE)['name'] == 'Global Name'
    assert get_setting(INSTITUTE, branch=branch)['name'] == 'Hyderabad Centre'
    assert Setting.objects.filter(setting_key=INSTITUTE).count() == 2


@pytest.mark.django_db
def test_admin_saves_section_with_upper_case_prefix(admin_client):
    response = admin_client.post('/settings/', {
        'section':         CERTIFICATE,
        'prefix':          'gtc',
        'left_signatory':  'Principal',
        'right_signatory': 'Head of Training',
    })
    assert response.status_code == 302
    value = get_setting(CERTIFICATE)
    assert value['prefix'] == 'GTC'
    assert value['left_signatory'] == 'Principal'


@pytest.mark.django_db
def test_invalid_prefix_is_rejected(admin_client):
    response = admin_client.post('/settings/', {
        'section':          RECEIPT,
        'prefix':           'RCP-1',
        'academy_name':     'Academy',
    })
    assert response.status_code == 200
    assert 'prefix' in response.context['receipt_form'].errors
    assert not Setting.objects.exists()


@pytest.mark.django_db
def test_non_admin_can_read_but_not_save(client, make_user):
    client.force_login(make_user('manager@example.com', roles=['branch_manager']))
    page = client.get('/settings/')
    assert page.status_code == 200
    assert not page.context['can_edit']
    assert page.context['receipt_form'].initial['prefix'] == 'RCP'

    response = client.post('/settings/', {'section': RECEIPT, 'prefix': 'XYZ', 'academy_name': 'A'})
    assert response.status_code == 302
    assert get_setting(RECEIPT)['prefix'] == 'RCP'

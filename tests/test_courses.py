import pytest

from academics.models import Course


def course_payload(**overrides):
    payload = {
        'name':           'Python Programming',
        'code':           'py101',
        'description':    '',
        'duration_hours': '',
        'duration_days':  '',
        'fee_amount':     '',
        'syllabus':       '',
        'is_active':      'on',
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
def test_code_is_stored_upper_case_and_blank_durations_are_zero(admin_client):
    response = admin_client.post('/courses/new/', course_payload())
    assert response.status_code == 302

    course = Course.objects.get(name='Python Programming')
    assert course.code == 'PY101'
    assert course.duration_hours == 0
    assert course.duration_days == 0
    assert course.fee_amount is None


@pytest.mark.django_db
def test_durations_survive_an_edit(admin_client, course):
    response = admin_client.post(f'/courses/{course.pk}/edit/', course_payload(
        name=course.name, code=course.code, duration_hours='90', duration_days='45', fee_amount='18000.50',
    ))
    assert response.status_code == 302

    course.refresh_from_db()
    assert (course.duration_hours, course.duration_days) == (90, 45)
    assert str(course.fee_amount) == '18000.50'

    form = admin_client.get(f'/courses/{course.pk}/edit/').context['form']
    assert form.initial['duration_hours'] == 90
    assert form.initial['duration_days'] == 45


@pytest.mark.django_db
def test_course_with_batches_cannot_be_deleted(admin_client, batch):
    admin_client.post(f'/courses/{batch.course_id}/delete/')
    assert Course.objects.filter(pk=batch.course_id).exists()


@pytest.mark.django_db
def test_unused_course_is_deleted(admin_client, course):
    response = admin_client.post(f'/courses/{course.pk}/delete/')
    assert response.url == '/courses/'
    assert not Course.objects.filter(pk=course.pk).exists()


@pytest.mark.django_db
def test_batch_end_date_before_start(admin_client, course):
    response = admin_client.post('/batches/new/', {
        'name':       'Evening',
        'code':       'ev1',
        'course':     course.pk,
        'start_date': '2026-03-01',
        'end_date':   '2026-02-01',
        'capacity':   '30',
        'is_active':  'on',
    })
    assert response.status_code == 200
    assert 'end_date' in response.context['form'].errors

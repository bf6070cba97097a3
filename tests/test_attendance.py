from datetime import date
from decimal import Decimal

import pytest

from academics.models import Attendance, Batch, Enrollment
from academics.services import attendance_percentage, attendance_sheet, save_attendance

DAY = date(2026, 2, 2)


@pytest.fixture
def second(make_student, batch):
    return Enrollment.objects.create(student=make_student('Sita Devi'), batch=batch)


def stored(batch, day=DAY):
    return dict(
        Attendance.objects.filter(batch=batch, session_date=day).values_list('enrollment_id', 'status')
    )


@pytest.mark.django_db
def test_save_replaces_the_day(batch, enrollment, second):
    assert save_attendance(batch, DAY, {enrollment.pk: 'present', second.pk: 'absent'}) == (2, 0, 0)
    first_row = Attendance.objects.get(enrollment=enrollment, session_date=DAY)

    assert save_attendance(batch, DAY, {enrollment.pk: 'present'}) == (0, 0, 1)
    assert stored(batch) == {enrollment.pk: 'present'}
    # untouched rows keep their identity
    assert Attendance.objects.get(enrollment=enrollment, session_date=DAY).pk == first_row.pk

    assert save_attendance(batch, DAY, {enrollment.pk: ('late', 'bus'), second.pk: 'excused'}) == (1, 1, 0)
    assert stored(batch) == {enrollment.pk: 'late', second.pk: 'excused'}
    assert Attendance.objects.get(enrollment=enrollment, session_date=DAY).remarks == 'bus'


@pytest.mark.django_db
def test_other_days_are_left_alone(batch, enrollment):
    save_attendance(batch, date(2026, 2, 1), {enrollment.pk: 'absent'})
    save_attendance(batch, DAY, {})
    assert stored(batch, date(2026, 2, 1)) == {enrollment.pk: 'absent'}


@pytest.mark.django_db
def test_unknown_status_saves_nothing(batch, enrollment):
    with pytest.raises(ValueError):
        save_attendance(batch, DAY, {enrollment.pk: 'sleeping'})
    assert not Attendance.objects.exists()


@pytest.mark.django_db
def test_enrollment_from_another_batch_is_rejected(batch, enrollment, course):
    other_batch = Batch.objects.create(
        name='Evening', code='EV1', course=course, start_date=date(2026, 1, 5),
    )
    with pytest.raises(ValueError):
        save_attendance(other_batch, DAY, {enrollment.pk: 'present'})


@pytest.mark.django_db
def test_sheet_defaults_to_present(batch, enrollment, second):
    save_attendance(batch, DAY, {second.pk: 'absent'})
    sheet = {e.pk: status for e, status in attendance_sheet(batch, DAY)}
    assert sheet == {enrollment.pk: 'present', second.pk: 'absent'}


@pytest.mark.django_db
def test_percentage_counts_late_as_attended(batch, enrollment):
    assert attendance_percentage(enrollment) is None
    save_attendance(batch, date(2026, 2, 1), {enrollment.pk: 'present'})
    save_attendance(batch, date(2026, 2, 2), {enrollment.pk: 'late'})
    save_attendance(batch, date(2026, 2, 3), {enrollment.pk: 'absent'})
    assert attendance_percentage(enrollment) == Decimal('66.67')


@pytest.mark.django_db
def test_save_view(client, trainer, batch, enrollment, second):
    client.force_login(trainer)
    response = client.post('/attendance/save/', {
        'batch':                     batch.pk,
        'session_date':              DAY.isoformat(),
        f'status_{enrollment.pk}':   'present',
        f'status_{second.pk}':       'absent',
        f'remarks_{second.pk}':      ' fever ',
    })
    assert response.status_code == 302
    assert response.url == f'/attendance/?batch={batch.pk}&session_date=2026-02-02'
    assert stored(batch) == {enrollment.pk: 'present', second.pk: 'absent'}
    row = Attendance.objects.get(enrollment=second, session_date=DAY)
    assert row.remarks == 'fever'
    assert row.marked_by == trainer.staff_profile


@pytest.mark.django_db
def test_sheet_view_hides_save_for_read_only_users(client, make_user, batch, enrollment):
    client.force_login(make_user('reception@example.com', roles=['reception']))
    response = client.get('/attendance/', {'batch': batch.pk, 'session_date': DAY.isoformat()})
    assert response.status_code == 200
    assert not response.context['can_mark']
    assert [e.pk for e, _ in response.context['rows']] == [enrollment.pk]


@pytest.mark.django_db
@pytest.mark.parametrize('batch_value', ['abc', '', '1.5'])
def test_save_view_rejects_malformed_batch(client, trainer, batch_value):
    client.force_login(trainer)
    response = client.post('/attendance/save/', {'batch': batch_value, 'session_date': DAY.isoformat()})
    assert response.status_code == 302
    assert response.url == '/attendance/'
    assert not Attendance.objects.exists()


@pytest.mark.django_db
def test_save_view_rejects_impossible_date(client, trainer, batch, enrollment):
    client.force_login(trainer)
    response = client.post('/attendance/save/', {
        'batch':                   batch.pk,
        'session_date':            '2026-02-30',
        f'status_{enrollment.pk}': 'present',
    })
    assert response.url == '/attendance/'
    assert not Attendance.objects.exists()

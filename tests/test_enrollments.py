import pytest
from django.db import IntegrityError

from academics.forms import EnrollmentForm
from academics.models import ENROLLMENT_DUPLICATE_MESSAGE, Enrollment
from academics.services import enrollment_error, set_enrollment_status


@pytest.mark.django_db
def test_new_enrollment_defaults(student, batch):
    form = EnrollmentForm({
        'student':         student.pk,
        'batch':           batch.pk,
        'enrollment_date': '2026-01-05',
        'fee_paid':        '',
        'fee_pending':     '',
    })
    assert form.is_valid(), form.errors
    enrollment = form.save()
    assert enrollment.status == Enrollment.Status.ACTIVE
    assert enrollment.fee_paid == 0
    assert enrollment.fee_pending == 0


@pytest.mark.django_db
def test_duplicate_enrollment_is_rejected_by_the_form(enrollment):
    form = EnrollmentForm({
        'student':         enrollment.student_id,
        'batch':           enrollment.batch_id,
        'enrollment_date': '2026-01-06',
    })
    assert not form.is_valid()
    assert ENROLLMENT_DUPLICATE_MESSAGE in form.non_field_errors()


def test_store_duplicate_maps_to_enrolled_message():
    exc = IntegrityError('UNIQUE constraint failed: academics_enrollment.student_id, academics_enrollment.batch_id')
    assert enrollment_error(exc) == ENROLLMENT_DUPLICATE_MESSAGE


def test_other_store_errors_pass_through():
    assert enrollment_error(IntegrityError('NOT NULL constraint failed')) == 'NOT NULL constraint failed'
    assert enrollment_error(IntegrityError('')) == 'Could not save enrollment.'


@pytest.mark.django_db
def test_negative_fee_is_rejected(student, batch):
    form = EnrollmentForm({
        'student':         student.pk,
        'batch':           batch.pk,
        'enrollment_date': '2026-01-05',
        'fee_paid':        '-1',
    })
    assert not form.is_valid()
    assert 'fee_paid' in form.errors


@pytest.mark.django_db
def test_status_change(admin_client, enrollment):
    response = admin_client.post(f'/enrollments/{enrollment.pk}/status/', {'status': 'completed'})
    assert response.status_code == 302
    enrollment.refresh_from_db()
    assert enrollment.status == Enrollment.Status.COMPLETED

    with pytest.raises(ValueError):
        set_enrollment_status(enrollment, 'graduated')


@pytest.mark.django_db
def test_enrolled_by_is_the_signed_in_staff(admin_client, admin_staff, student, batch):
    response = admin_client.post('/enrollments/new/', {
        'student':         student.pk,
        'batch':           batch.pk,
        'enrollment_date': '2026-01-05',
    })
    assert response.status_code == 302
    enrollment = Enrollment.objects.get(student=student, batch=batch)
    assert enrollment.enrolled_by == admin_staff.staff_profile

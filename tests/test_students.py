import re
from datetime import date
from decimal import Decimal

import pytest

from academics import services
from academics.models import Student
from academics.services import generate_admission_number, save_new_student
from finances.models import Receipt
from finances.services import create_receipt


def test_admission_number_format():
    number = generate_admission_number(today=date(2026, 4, 17))
    assert re.fullmatch(r'GT2026\d{4}', number)


@pytest.mark.django_db
def test_taken_admission_number_is_skipped(student, branch, monkeypatch):
    candidates = iter([student.admission_number, 'GT20269999'])
    monkeypatch.setattr(services, 'generate_admission_number', lambda: next(candidates))

    other = save_new_student(Student(full_name='Sita Devi', phone='9000000001', branch=branch))
    assert other.admission_number == 'GT20269999'


@pytest.mark.django_db
def test_create_student_assigns_admission_number(admin_client, branch):
    response = admin_client.post('/students/new/', {
        'full_name': 'Anil Reddy',
        'phone':     '9123456789',
        'branch':    branch.pk,
        'is_active': 'on',
    })
    assert response.status_code == 302
    student = Student.objects.get(full_name='Anil Reddy')
    assert re.fullmatch(r'GT\d{8}', student.admission_number)


@pytest.mark.django_db
def test_admission_number_is_not_editable(admin_client, student):
    original = student.admission_number
    response = admin_client.post(f'/students/{student.pk}/edit/', {
        'full_name':        'Ravi K.',
        'phone':            student.phone,
        'admission_number': 'GT00000000',
        'is_active':        'on',
    })
    assert response.status_code == 302
    student.refresh_from_db()
    assert student.full_name == 'Ravi K.'
    assert student.admission_number == original


@pytest.mark.django_db
def test_student_with_receipts_cannot_be_deleted(admin_client, student):
    create_receipt(Receipt(student=student, amount=Decimal('500')))
    response = admin_client.post(f'/students/{student.pk}/delete/', follow=True)
    assert Student.objects.filter(pk=student.pk).exists()
    assert any('cannot be deleted' in str(m) for m in response.context['messages'])


@pytest.mark.django_db
def test_student_list_search(admin_client, make_student):
    make_student('Ravi Kumar')
    make_student('Sita Devi')
    response = admin_client.get('/students/', {'q': 'sita'})
    assert [s.full_name for s in response.context['students']] == ['Sita Devi']

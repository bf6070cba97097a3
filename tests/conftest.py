"""
Shared fixtures: staff users with roles, and a small course / batch /
student / enrollment graph to hang tests on.
"""

from datetime import date
from decimal import Decimal

import pytest

from academics.models import Batch, Course, Enrollment, Student
from academics.services import save_new_student
from accounts.services import set_roles
from core.models import Branch

PASSWORD = 'Tr41ning-Desk!'


@pytest.fixture
def make_user(django_user_model):
    def make(email='staff@example.com', roles=(), **extra):
        user = django_user_model.objects.create_user(
            username=email, email=email, password=PASSWORD, **extra,
        )
        set_roles(user, roles)
        return user
    return make


@pytest.fixture
def admin_staff(make_user):
    return make_user('admin@example.com', roles=['admin'], first_name='Asha', last_name='Rao')


@pytest.fixture
def trainer(make_user):
    return make_user('trainer@example.com', roles=['trainer'])


@pytest.fixture
def admin_client(client, admin_staff):
    client.force_login(admin_staff)
    return client


@pytest.fixture
def branch(db):
    return Branch.objects.create(name='Hyderabad', code='HYD')


@pytest.fixture
def course(branch):
    return Course.objects.create(
        name='Full Stack Web Development', code='FSWD', duration_hours=120,
        fee_amount=Decimal('25000.00'), branch=branch,
    )


@pytest.fixture
def batch(course, branch):
    return Batch.objects.create(
        name='FSWD Morning', code='FSWD-M1', course=course, branch=branch,
        start_date=date(2026, 1, 5), end_date=date(2026, 6, 30),
    )


@pytest.fixture
def make_student(branch):
    def make(full_name='Ravi Kumar', phone='9876543210', **extra):
        return save_new_student(Student(full_name=full_name, phone=phone, branch=branch, **extra))
    return make


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def enrollment(student, batch):
    return Enrollment.objects.create(student=student, batch=batch, fee_pending=Decimal('25000'))

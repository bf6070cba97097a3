from decimal import Decimal

import pytest
from django.utils import timezone

from academics.models import Certificate, Enrollment
from academics.services import CertificateError, issue_certificate, revoke_certificate, save_attendance


@pytest.fixture
def completed(enrollment):
    enrollment.status = Enrollment.Status.COMPLETED
    enrollment.save()
    return enrollment


@pytest.mark.django_db
def test_only_completed_enrollments_get_certificates(enrollment):
    with pytest.raises(CertificateError):
        issue_certificate(enrollment)
    assert not Certificate.objects.exists()


@pytest.mark.django_db
def test_issue_copies_names_and_numbers(completed, batch):
    save_attendance(batch, batch.start_date, {completed.pk: 'present'})
    certificate = issue_certificate(completed, grade='A')

    year = timezone.localdate().year
    assert certificate.certificate_number == f'CERT-{year}-0001'
    assert certificate.course_name == 'Full Stack Web Development'
    assert certificate.batch_name == 'FSWD Morning'
    assert certificate.completion_date == batch.end_date
    assert certificate.attendance_percentage == Decimal('100.00')
    assert certificate.branch == batch.branch

    # names are copies, not joins
    batch.course.name = 'Renamed'
    batch.course.save()
    certificate.refresh_from_db()
    assert certificate.course_name == 'Full Stack Web Development'


@pytest.mark.django_db
def test_revoke_once(completed):
    certificate = issue_certificate(completed)
    revoke_certificate(certificate, 'Issued in error')
    certificate.refresh_from_db()
    assert certificate.status == Certificate.Status.REVOKED
    assert certificate.revoke_reason == 'Issued in error'
    with pytest.raises(CertificateError):
        revoke_certificate(certificate, 'again')


@pytest.mark.django_db
def test_issue_view(admin_client, completed):
    response = admin_client.post('/certificates/issue/', {
        'enrollment':            completed.pk,
        'grade':                 'A+',
        'attendance_percentage': '92.5',
        'issue_date':            '2026-07-01',
    })
    assert response.status_code == 302
    certificate = Certificate.objects.get()
    assert certificate.grade == 'A+'
    assert certificate.attendance_percentage == Decimal('92.50')
    assert certificate.issue_date.isoformat() == '2026-07-01'


@pytest.mark.django_db
def test_verify_page_is_public(client, completed):
    certificate = issue_certificate(completed)
    response = client.get(f'/verify/{certificate.certificate_number}/')
    assert response.status_code == 200
    assert response.context['certificate'] == certificate

    assert client.get('/verify/CERT-1999-0001/').status_code == 404


@pytest.mark.django_db
def test_document_and_text_download(admin_client, completed):
    certificate = issue_certificate(completed)
    number = certificate.certificate_number

    page = admin_client.get(f'/certificates/{certificate.pk}/document/')
    html = page.content.decode()
    assert f'<title>Certificate-{number}</title>' in html
    assert 'data:image/png;base64,' in html

    text = admin_client.get(f'/certificates/{certificate.pk}/text/')
    assert text['Content-Disposition'] == f'attachment; filename="Certificate-{number}.txt"'
    body = text.content.decode()
    assert 'Ravi Kumar' in body
    assert f'Verify at: http://testserver/verify/{number}/' in body


@pytest.mark.django_db
def test_revoke_view_needs_reason(admin_client, completed):
    certificate = issue_certificate(completed)
    admin_client.post(f'/certificates/{certificate.pk}/revoke/', {'reason': ''})
    certificate.refresh_from_db()
    assert certificate.status == Certificate.Status.ISSUED

    admin_client.post(f'/certificates/{certificate.pk}/revoke/', {'reason': 'Duplicate'})
    certificate.refresh_from_db()
    assert certificate.status == Certificate.Status.REVOKED

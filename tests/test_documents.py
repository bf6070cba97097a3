from datetime import date
from decimal import Decimal

import pytest

from core.documents import (
    CertificateData,
    ReceiptData,
    document_filename,
    format_inr,
    payment_mode_label,
    render_certificate_html,
    render_certificate_text,
    render_receipt_html,
    render_receipt_text,
)
from core.services import INSTITUTE, RECEIPT, save_setting


def receipt(**overrides):
    data = {
        'receipt_number':   'RCP-2026-0042',
        'student_name':     'Ravi Kumar',
        'admission_number': 'GT20260417',
        'amount':           Decimal('1500.50'),
        'payment_mode':     'upi',
        'payment_date':     date(2026, 2, 1),
    }
    data.update(overrides)
    return ReceiptData(**data)


def test_inr_formatting():
    assert format_inr('1500.50') == '₹1,500.50'
    assert format_inr(Decimal('1234567')) == '₹1,234,567.00'
    assert format_inr(None) == '₹0.00'


def test_payment_mode_label():
    assert payment_mode_label('upi') == 'Upi'
    assert payment_mode_label('bank_transfer') == 'Bank transfer'
    assert payment_mode_label('') == ''


def test_filename():
    assert document_filename('Receipt', 'RCP-2026-0042') == 'Receipt-RCP-2026-0042.pdf'


@pytest.mark.django_db
def test_academy_receipt_uses_academy_header():
    html = render_receipt_html(receipt())
    assert '<title>Receipt-RCP-2026-0042</title>' in html
    assert 'GANISHKA ACADEMY' in html
    assert '₹1,500.50' in html


@pytest.mark.django_db
def test_technology_receipt_uses_institute_header():
    save_setting(INSTITUTE, {'name': 'Acme Tech', 'subtitle': 'Coding School'})
    text = render_receipt_text(receipt(receipt_type='GT'))
    assert text.startswith('Acme Tech\nCoding School')
    assert 'Payment Mode:  Upi' in text


@pytest.mark.django_db
def test_receipt_footer_from_settings():
    save_setting(RECEIPT, {'footer_note': 'See you in class'})
    assert 'See you in class' in render_receipt_text(receipt())


@pytest.mark.django_db
def test_text_is_not_html_escaped():
    text = render_receipt_text(receipt(student_name="D'Souza & Sons"))
    assert "D'Souza & Sons" in text


@pytest.mark.django_db
def test_certificate_rendering():
    data = CertificateData(
        certificate_number='CERT-2026-0001',
        student_name='Ravi Kumar',
        course_name='Full Stack Web Development',
        batch_name='FSWD Morning',
        issue_date=date(2026, 7, 1),
        grade='A',
        attendance_percentage=Decimal('92.50'),
        verify_url='https://erp.example/verify/CERT-2026-0001/',
    )
    html = render_certificate_html(data)
    assert '<title>Certificate-CERT-2026-0001</title>' in html
    assert 'data:image/png;base64,' in html
    assert 'REVOKED' not in html

    text = render_certificate_text(data)
    assert 'Attendance:   92.50%' in text
    assert 'Director / Course Coordinator' in text

    data.status = 'revoked'
    assert 'REVOKED' in render_certificate_html(data)

"""
core/documents.py
─────────────────
Printable certificate and receipt documents.

Each document is built from a flat data record and rendered through a
Django template, either as a stand-alone HTML page the browser prints to
PDF, or as a plain-text fallback offered as a download.  No PDF bytes are
produced here.
"""

import base64
import io
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

import qrcode
from django.template.loader import render_to_string

from .services import CERTIFICATE, INSTITUTE, RECEIPT, get_setting


# ── Data records ──────────────────────────────────────────────────────────────

@dataclass
class CertificateData:
    certificate_number: str
    student_name: str
    course_name: str
    batch_name: str
    issue_date: date
    grade: str = ''
    attendance_percentage: Optional[Decimal] = None
    completion_date: Optional[date] = None
    status: str = 'issued'
    verify_url: str = ''


@dataclass
class ReceiptData:
    receipt_number: str
    student_name: str
    admission_number: str
    amount: Decimal
    payment_mode: str
    payment_date: date
    status: str = 'valid'
    receipt_type: str = 'GA'
    description: str = ''
    batch_name: str = ''
    course_name: str = ''


# ── Formatting ────────────────────────────────────────────────────────────────

def format_inr(amount) -> str:
    """``1500.5`` → ``'₹1,500.50'``."""
    return f"₹{Decimal(str(amount or 0)):,.2f}"


def payment_mode_label(mode: str) -> str:
    """Capitalise the first letter and turn the first underscore into a space."""
    if not mode:
        return ''
    return (mode[0].upper() + mode[1:]).replace('_', ' ', 1)


def document_title(kind: str, number: str) -> str:
    """``('Receipt', 'RCP-2026-0001')`` → ``'Receipt-RCP-2026-0001'``."""
    return f"{kind}-{number}"


def document_filename(kind: str, number: str, extension: str = 'pdf') -> str:
    return f"{document_title(kind, number)}.{extension}"


def qr_code_base64(payload: str, box_size: int = 4) -> str:
    """Encode *payload* as a QR code and return it as a base64 PNG string."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=2,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color='#1F5AA6', back_color='white')
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode('utf-8')


# ── Template context ──────────────────────────────────────────────────────────

def _certificate_context(data: CertificateData) -> dict:
    context = asdict(data)
    context.update({
        'title':       document_title('Certificate', data.certificate_number),
        'institute':   get_setting(INSTITUTE),
        'config':      get_setting(CERTIFICATE),
        'qr_base64':   qr_code_base64(data.verify_url) if data.verify_url else None,
    })
    return context


def _receipt_context(data: ReceiptData) -> dict:
    institute = get_setting(INSTITUTE)
    config = get_setting(RECEIPT)
    if data.receipt_type == 'GT':
        header = (institute['name'], institute['subtitle'])
    else:
        header = (config['academy_name'], config['academy_subtitle'])

    context = asdict(data)
    context.update({
        'title':              document_title('Receipt', data.receipt_number),
        'header_name':        header[0],
        'header_subtitle':    header[1],
        'amount_display':     format_inr(data.amount),
        'payment_mode_label': payment_mode_label(data.payment_mode),
        'institute':          institute,
        'config':             config,
    })
    return context


# ── Renderers ─────────────────────────────────────────────────────────────────

def render_certificate_html(data: CertificateData) -> str:
    return render_to_string('documents/certificate.html', _certificate_context(data))


def render_certificate_text(data: CertificateData) -> str:
    return render_to_string('documents/certificate.txt', _certificate_context(data))


def render_receipt_html(data: ReceiptData) -> str:
    return render_to_string('documents/receipt.html', _receipt_context(data))


def render_receipt_text(data: ReceiptData) -> str:
    return render_to_string('documents/receipt.txt', _receipt_context(data))

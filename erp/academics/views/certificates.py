"""
academics/views/certificates.py
───────────────────────────────
Certificate list / issue / revoke, the printable document and its
plain-text fallback, and the public verification page.
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render

from accounts.permissions import permission_required_for, require_POST_or_405
from core.documents import document_filename, render_certificate_html, render_certificate_text
from core.errors import friendly_error
from core.forms import ReasonForm
from core.search import search_queryset
from core.utils import add_form_control_class, search_term

from ..forms import CertificateIssueForm
from ..models import Certificate
from ..services import CertificateError, certificate_document, issue_certificate, revoke_certificate

logger = logging.getLogger(__name__)

CERTIFICATE_SEARCH_FIELDS = ['certificate_number', 'course_name', 'student__full_name']


@login_required
def certificate_list_view(req):
    query = search_term(req)
    certificates = search_queryset(
        Certificate.objects.select_related('student'), query, CERTIFICATE_SEARCH_FIELDS,
    )
    return render(req, 'academics/certificate_list.html', {
        'certificates': certificates,
        'query':        query,
    })


@permission_required_for('certificates', 'add')
def certificate_issue_view(req):
    """Issue a certificate for a completed enrollment; the number comes from the generator."""
    if req.method == 'POST':
        form = CertificateIssueForm(req.POST)
        if form.is_valid():
            data = form.cleaned_data
            try:
                certificate = issue_certificate(
                    data['enrollment'],
                    issued_by=req.auth.profile,
                    grade=data['grade'],
                    attendance=data['attendance_percentage'],
                    completion_date=data['completion_date'],
                    issue_date=data['issue_date'],
                )
            except CertificateError as exc:
                messages.error(req, str(exc))
            except DatabaseError as exc:
                logger.exception('Issuing certificate failed')
                messages.error(req, friendly_error(exc, 'Could not issue certificate.'))
            else:
                messages.success(req, f'Certificate {certificate.certificate_number} issued.')
                return redirect('certificate_list')
        else:
            messages.error(req, 'Please fix the errors below.')
    else:
        form = CertificateIssueForm(initial={'enrollment': req.GET.get('enrollment')})

    add_form_control_class(form)
    return render(req, 'academics/certificate_form.html', {'form': form})


@permission_required_for('certificates', 'change')
@require_POST_or_405
def certificate_revoke_view(req, certificate_id):
    certificate = get_object_or_404(Certificate, pk=certificate_id)
    form = ReasonForm(req.POST)
    if not form.is_valid():
        messages.error(req, 'Please give a reason for revoking the certificate.')
        return redirect('certificate_list')
    try:
        revoke_certificate(certificate, form.cleaned_data['reason'])
    except CertificateError as exc:
        messages.error(req, str(exc))
    else:
        messages.success(req, f'Certificate {certificate.certificate_number} revoked.')
    return redirect('certificate_list')


@login_required
def certificate_document_view(req, certificate_id):
    """Stand-alone HTML page that opens the browser's print dialog."""
    certificate = get_object_or_404(Certificate.objects.select_related('student'), pk=certificate_id)
    return HttpResponse(render_certificate_html(certificate_document(certificate, req)))


@login_required
def certificate_text_view(req, certificate_id):
    """Plain-text download for when printing is not possible."""
    certificate = get_object_or_404(Certificate.objects.select_related('student'), pk=certificate_id)
    response = HttpResponse(
        render_certificate_text(certificate_document(certificate, req)),
        content_type='text/plain; charset=utf-8',
    )
    filename = document_filename('Certificate', certificate.certificate_number, 'txt')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def verify_certificate_view(req, certificate_number):
    """Public page the certificate QR code points to."""
    certificate = (
        Certificate.objects
        .select_related('student')
        .filter(certificate_number=certificate_number)
        .first()
    )
    return render(req, 'academics/certificate_verify.html', {
        'certificate':        certificate,
        'certificate_number': certificate_number,
    }, status=200 if certificate else 404)

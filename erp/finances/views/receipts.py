"""
finances/views/receipts.py
──────────────────────────
Receipt list / create / void or refund, the printable receipt and its
plain-text fallback.  Receipts are never edited or deleted.
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.db.models import Sum
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render

from accounts.permissions import permission_required_for, require_POST_or_405
from core.documents import document_filename, render_receipt_html, render_receipt_text
from core.errors import friendly_error
from core.forms import ReasonForm
from core.search import search_queryset
from core.utils import add_form_control_class, search_term

from ..forms import ReceiptForm
from ..models import Receipt
from ..services import ReceiptError, change_receipt_status, create_receipt, receipt_document

logger = logging.getLogger(__name__)

RECEIPT_SEARCH_FIELDS = ['receipt_number', 'student__full_name', 'student__admission_number']


def _receipt_queryset():
    return Receipt.objects.select_related('student', 'enrollment', 'enrollment__batch', 'enrollment__batch__course')


@login_required
def receipt_list_view(req):
    query = search_term(req)
    receipts = search_queryset(_receipt_queryset(), query, RECEIPT_SEARCH_FIELDS)
    total = receipts.filter(status=Receipt.Status.VALID).aggregate(s=Sum('amount'))['s'] or 0
    return render(req, 'finances/receipt_list.html', {
        'receipts':    receipts,
        'query':       query,
        'valid_total': total,
    })


@permission_required_for('receipts', 'add')
def receipt_create_view(req):
    if req.method == 'POST':
        form = ReceiptForm(req.POST)
        if form.is_valid():
            try:
                receipt = create_receipt(form.save(commit=False), generated_by=req.auth.profile)
            except DatabaseError as exc:
                logger.exception('Creating receipt failed')
                messages.error(req, friendly_error(exc, 'Could not create receipt.'))
            else:
                messages.success(req, f'Receipt {receipt.receipt_number} created.')
                return redirect('receipt_list')
        else:
            messages.error(req, 'Please fix the errors below.')
    else:
        form = ReceiptForm(initial={'student': req.GET.get('student')})

    add_form_control_class(form)
    return render(req, 'finances/receipt_form.html', {'form': form})


@permission_required_for('receipts', 'change')
@require_POST_or_405
def receipt_status_view(req, receipt_id):
    """Void or refund a valid receipt; the POST carries ``status`` and ``reason``."""
    receipt = get_object_or_404(Receipt, pk=receipt_id)
    form = ReasonForm(req.POST)
    if not form.is_valid():
        messages.error(req, 'Please give a reason.')
        return redirect('receipt_list')
    try:
        change_receipt_status(receipt, req.POST.get('status', ''), form.cleaned_data['reason'])
    except ReceiptError as exc:
        messages.error(req, str(exc))
    else:
        messages.success(req, f'Receipt {receipt.receipt_number} {receipt.get_status_display().lower()}.')
    return redirect('receipt_list')


@login_required
def receipt_document_view(req, receipt_id):
    """Stand-alone HTML page that opens the browser's print dialog."""
    receipt = get_object_or_404(_receipt_queryset(), pk=receipt_id)
    return HttpResponse(render_receipt_html(receipt_document(receipt)))


@login_required
def receipt_text_view(req, receipt_id):
    receipt = get_object_or_404(_receipt_queryset(), pk=receipt_id)
    response = HttpResponse(
        render_receipt_text(receipt_document(receipt)),
        content_type='text/plain; charset=utf-8',
    )
    filename = document_filename('Receipt', receipt.receipt_number, 'txt')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response

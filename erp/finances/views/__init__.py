"""
finances/views/
───────────────
  receipts.py – receipt list, create, void / refund, print and text download
"""
from .receipts import (
    receipt_create_view,
    receipt_document_view,
    receipt_list_view,
    receipt_status_view,
    receipt_text_view,
)

__all__ = [
    'receipt_list_view',
    'receipt_create_view',
    'receipt_status_view',
    'receipt_document_view',
    'receipt_text_view',
]

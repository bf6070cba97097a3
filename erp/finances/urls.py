"""
finances/urls.py
────────────────
URL patterns for receipts.
Included from the root urls.py with:
    path('', include('finances.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    path('receipts/',                             views.receipt_list_view,     name='receipt_list'),
    path('receipts/new/',                         views.receipt_create_view,   name='receipt_create'),
    path('receipts/<int:receipt_id>/status/',     views.receipt_status_view,   name='receipt_status'),
    path('receipts/<int:receipt_id>/document/',   views.receipt_document_view, name='receipt_document'),
    path('receipts/<int:receipt_id>/text/',       views.receipt_text_view,     name='receipt_text'),
]

"""
finances/admin.py
─────────────────
Admin registration for Receipt.
"""

from django.contrib import admin

from .models import Receipt


@admin.register(Receipt)
class ReceiptAdmin(admin.ModelAdmin):
    list_display    = ('receipt_number', 'student', 'amount', 'payment_mode', 'receipt_type', 'payment_date', 'status')
    list_filter     = ('status', 'payment_mode', 'receipt_type', 'payment_date')
    search_fields   = ('receipt_number', 'student__full_name', 'student__admission_number')
    readonly_fields = ('receipt_number', 'created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('receipt_number', 'student', 'enrollment', 'branch', 'amount', 'payment_mode',
                       'receipt_type', 'payment_date', 'description', 'remarks'),
        }),
        ('Status', {
            'fields': ('status', 'void_reason', 'generated_by'),
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

"""
core/templatetags/erp_tags.py
─────────────────────────────
Display filters shared by list screens and documents.

    {% load erp_tags %}
    {{ receipt.amount|inr }}            → ₹1,500.50
    {{ receipt.payment_mode|payment_mode }} → Bank transfer
"""

from django import template

from ..documents import format_inr, payment_mode_label

register = template.Library()


@register.filter
def inr(value):
    if value is None or value == '':
        return '—'
    return format_inr(value)


@register.filter
def payment_mode(value):
    return payment_mode_label(value or '')


@register.simple_tag(takes_context=True)
def nav_active(context, path):
    """'active' when the current request path sits under *path*."""
    current = context.get('current_path', '')
    return 'active' if current.startswith(path) else ''

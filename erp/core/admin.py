"""
core/admin.py
─────────────
Admin registrations for Branch, Setting and DocumentSequence.
"""

from django.contrib import admin

from .models import Branch, DocumentSequence, Setting


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display  = ('name', 'code', 'phone', 'email', 'is_active')
    list_filter   = ('is_active',)
    search_fields = ('name', 'code')


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    list_display    = ('setting_key', 'branch', 'updated_at')
    list_filter     = ('setting_key', 'branch')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(DocumentSequence)
class DocumentSequenceAdmin(admin.ModelAdmin):
    list_display = ('kind', 'year', 'last_value')
    list_filter  = ('kind', 'year')

"""
accounts/admin.py
─────────────────
Admin registrations for User, StaffProfile and UserRole.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import StaffProfile, User, UserRole


class UserRoleInline(admin.TabularInline):
    model = UserRole
    extra = 0


@admin.register(User)
class ERPUserAdmin(UserAdmin):
    list_display  = ('email', 'first_name', 'last_name', 'is_active', 'is_staff', 'last_login')
    list_filter   = ('is_active', 'is_staff', 'is_superuser')
    search_fields = ('email', 'first_name', 'last_name')
    ordering      = ('email',)
    inlines       = (UserRoleInline,)


@admin.register(StaffProfile)
class StaffProfileAdmin(admin.ModelAdmin):
    list_display    = ('employee_id', 'full_name', 'email', 'designation', 'branch', 'is_active')
    list_filter     = ('is_active', 'branch')
    search_fields   = ('employee_id', 'full_name', 'email', 'phone')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display  = ('user', 'role')
    list_filter   = ('role',)
    search_fields = ('user__email',)

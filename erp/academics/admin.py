"""
academics/admin.py
──────────────────
Admin registrations for Course, Batch, Student, Enrollment, Attendance and
Certificate.
"""

from django.contrib import admin

from .models import Attendance, Batch, Certificate, Course, Enrollment, Student


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display  = ('name', 'code', 'duration_hours', 'duration_days', 'fee_amount', 'branch', 'is_active')
    list_filter   = ('is_active', 'branch')
    search_fields = ('name', 'code')


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    list_display  = ('name', 'code', 'course', 'trainer', 'start_date', 'end_date', 'capacity', 'is_active')
    list_filter   = ('is_active', 'course', 'branch')
    search_fields = ('name', 'code', 'course__name')


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display    = ('admission_number', 'full_name', 'phone', 'email', 'branch', 'is_active')
    list_filter     = ('is_active', 'branch')
    search_fields   = ('admission_number', 'full_name', 'phone', 'email')
    readonly_fields = ('admission_number', 'created_at', 'updated_at')


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display  = ('student', 'batch', 'status', 'enrollment_date', 'fee_paid', 'fee_pending')
    list_filter   = ('status', 'batch')
    search_fields = ('student__full_name', 'student__admission_number', 'batch__name', 'batch__code')


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display  = ('session_date', 'batch', 'enrollment', 'status', 'marked_by')
    list_filter   = ('status', 'batch', 'session_date')
    search_fields = ('enrollment__student__full_name',)


@admin.register(Certificate)
class CertificateAdmin(admin.ModelAdmin):
    list_display    = ('certificate_number', 'student', 'course_name', 'grade', 'issue_date', 'status')
    list_filter     = ('status', 'issue_date')
    search_fields   = ('certificate_number', 'student__full_name', 'course_name')
    readonly_fields = ('certificate_number', 'created_at', 'updated_at')

"""
academics/urls.py
─────────────────
URL patterns for students, courses, batches, enrollments, attendance and
certificates.  Included from the root urls.py with:
    path('', include('academics.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    # Students
    path('students/',                        views.student_list_view,   name='student_list'),
    path('students/new/',                    views.student_create_view, name='student_create'),
    path('students/<int:student_id>/edit/',  views.student_edit_view,   name='student_edit'),
    path('students/<int:student_id>/delete/', views.student_delete_view, name='student_delete'),

    # Courses
    path('courses/',                        views.course_list_view,   name='course_list'),
    path('courses/new/',                    views.course_create_view, name='course_create'),
    path('courses/<int:course_id>/edit/',   views.course_edit_view,   name='course_edit'),
    path('courses/<int:course_id>/delete/', views.course_delete_view, name='course_delete'),

    # Batches
    path('batches/',                       views.batch_list_view,   name='batch_list'),
    path('batches/new/',                   views.batch_create_view, name='batch_create'),
    path('batches/<int:batch_id>/edit/',   views.batch_edit_view,   name='batch_edit'),
    path('batches/<int:batch_id>/delete/', views.batch_delete_view, name='batch_delete'),

    # Enrollments
    path('enrollments/',                            views.enrollment_list_view,   name='enrollment_list'),
    path('enrollments/new/',                        views.enrollment_create_view, name='enrollment_create'),
    path('enrollments/<int:enrollment_id>/edit/',   views.enrollment_edit_view,   name='enrollment_edit'),
    path('enrollments/<int:enrollment_id>/status/', views.enrollment_status_view, name='enrollment_status'),
    path('enrollments/<int:enrollment_id>/delete/', views.enrollment_delete_view, name='enrollment_delete'),

    # Attendance
    path('attendance/',      views.attendance_view,      name='attendance'),
    path('attendance/save/', views.attendance_save_view, name='attendance_save'),

    # Certificates
    path('certificates/',                                 views.certificate_list_view,     name='certificate_list'),
    path('certificates/issue/',                           views.certificate_issue_view,    name='certificate_issue'),
    path('certificates/<int:certificate_id>/revoke/',     views.certificate_revoke_view,   name='certificate_revoke'),
    path('certificates/<int:certificate_id>/document/',   views.certificate_document_view, name='certificate_document'),
    path('certificates/<int:certificate_id>/text/',       views.certificate_text_view,     name='certificate_text'),
    path('verify/<str:certificate_number>/',              views.verify_certificate_view,   name='verify_certificate'),
]

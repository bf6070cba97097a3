"""
academics/views/
────────────────
Split into sub-modules, one per screen:
  students.py     – student CRUD
  courses.py      – course CRUD
  batches.py      – batch CRUD
  enrollments.py  – enrollment CRUD + status actions
  attendance.py   – daily attendance sheet
  certificates.py – issue / revoke / print / verify
"""
from .attendance import attendance_save_view, attendance_view
from .batches import batch_create_view, batch_delete_view, batch_edit_view, batch_list_view
from .certificates import (
    certificate_document_view,
    certificate_issue_view,
    certificate_list_view,
    certificate_revoke_view,
    certificate_text_view,
    verify_certificate_view,
)
from .courses import course_create_view, course_delete_view, course_edit_view, course_list_view
from .enrollments import (
    enrollment_create_view,
    enrollment_delete_view,
    enrollment_edit_view,
    enrollment_list_view,
    enrollment_status_view,
)
from .students import student_create_view, student_delete_view, student_edit_view, student_list_view

__all__ = [
    # students
    'student_list_view',
    'student_create_view',
    'student_edit_view',
    'student_delete_view',
    # courses
    'course_list_view',
    'course_create_view',
    'course_edit_view',
    'course_delete_view',
    # batches
    'batch_list_view',
    'batch_create_view',
    'batch_edit_view',
    'batch_delete_view',
    # enrollments
    'enrollment_list_view',
    'enrollment_create_view',
    'enrollment_edit_view',
    'enrollment_status_view',
    'enrollment_delete_view',
    # attendance
    'attendance_view',
    'attendance_save_view',
    # certificates
    'certificate_list_view',
    'certificate_issue_view',
    'certificate_revoke_view',
    'certificate_document_view',
    'certificate_text_view',
    'verify_certificate_view',
]

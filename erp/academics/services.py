"""
academics/services.py
─────────────────────
Write paths that are more than a single ``form.save()``:

- admission numbers for new students,
- saving a day's attendance sheet for a batch,
- attendance rate of an enrollment,
- issuing / revoking certificates,
- turning a Certificate into a printable document record.
"""

import logging
import random
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.urls import reverse
from django.utils import timezone

from core.documents import CertificateData
from core.errors import friendly_error
from core.numbering import generate_certificate_number

from .models import ENROLLMENT_DUPLICATE_MESSAGE, Attendance, Certificate, Enrollment, Student

logger = logging.getLogger(__name__)

ADMISSION_PREFIX = 'GT'
ADMISSION_ATTEMPTS = 5

ATTENDED_STATUSES = (Attendance.Status.PRESENT, Attendance.Status.LATE)


class CertificateError(Exception):
    """Raised when a certificate cannot be issued or revoked."""


# ── Students ──────────────────────────────────────────────────────────────────

def generate_admission_number(today=None) -> str:
    """``GT`` + four-digit year + four random digits, e.g. ``GT20260417``."""
    year = (today or timezone.localdate()).year
    return f"{ADMISSION_PREFIX}{year}{random.randint(0, 9999):04d}"


def save_new_student(student):
    """
    Give *student* a fresh admission number and insert it.

    Numbers already taken are skipped; after ADMISSION_ATTEMPTS collisions
    the IntegrityError is allowed to propagate.
    """
    for attempt in range(1, ADMISSION_ATTEMPTS + 1):
        number = generate_admission_number()
        if Student.objects.filter(admission_number=number).exists():
            logger.warning('Admission number %s taken (attempt %s)', number, attempt)
            continue
        student.admission_number = number
        try:
            with transaction.atomic():
                student.save()
        except IntegrityError:
            if attempt == ADMISSION_ATTEMPTS:
                raise
            logger.warning('Admission number %s lost a race (attempt %s)', number, attempt)
            continue
        logger.info('Student %s created as %s', student.full_name, number)
        return student
    raise IntegrityError('Could not allocate a unique admission number')


# ── Enrollments ───────────────────────────────────────────────────────────────

def enrollment_error(exc) -> str:
    """Message to flash when saving an enrollment hit the store."""
    return friendly_error(exc, 'Could not save enrollment.', duplicate=ENROLLMENT_DUPLICATE_MESSAGE)


def set_enrollment_status(enrollment, status):
    if status not in Enrollment.Status.values:
        raise ValueError(f"Unknown enrollment status: {status!r}")
    previous = enrollment.status
    enrollment.status = status
    enrollment.save(update_fields=['status', 'updated_at'])
    logger.info('Enrollment %s: %s → %s', enrollment.pk, previous, status)
    return enrollment


# ── Attendance ────────────────────────────────────────────────────────────────

def save_attendance(batch, session_date, marks, marked_by=None, session_number=None):
    """
    Make the stored sheet for (*batch*, *session_date*) equal *marks*.

    *marks* maps enrollment id → status, or → ``(status, remarks)``.
    Inside one transaction rows for enrollments no longer on the sheet are
    deleted, changed rows are updated and new rows inserted; untouched rows
    keep their identity.  Returns ``(created, updated, deleted)`` counts.
    """
    normalised = {}
    for enrollment_id, mark in marks.items():
        status, remarks = (mark, '') if isinstance(mark, str) else mark
        if status not in Attendance.Status.values:
            raise ValueError(f"Unknown attendance status: {status!r}")
        normalised[int(enrollment_id)] = (status, remarks or '')

    known = set(
        Enrollment.objects
        .filter(batch=batch, pk__in=normalised)
        .values_list('pk', flat=True)
    )
    stray = set(normalised) - known
    if stray:
        raise ValueError(f"Enrollments {sorted(stray)} do not belong to batch {batch.code}")

    with transaction.atomic():
        existing = {
            row.enrollment_id: row
            for row in Attendance.objects.select_for_update().filter(
                batch=batch, session_date=session_date,
            )
        }

        removed = [pk for pk in existing if pk not in normalised]
        deleted = 0
        if removed:
            deleted, _ = Attendance.objects.filter(
                batch=batch, session_date=session_date, enrollment_id__in=removed,
            ).delete()

        to_update, to_create = [], []
        for enrollment_id, (status, remarks) in normalised.items():
            row = existing.get(enrollment_id)
            if row is None:
                to_create.append(Attendance(
                    batch=batch,
                    enrollment_id=enrollment_id,
                    session_date=session_date,
                    session_number=session_number,
                    status=status,
                    remarks=remarks,
                    marked_by=marked_by,
                ))
            elif (row.status, row.remarks) != (status, remarks):
                row.status = status
                row.remarks = remarks
                row.marked_by = marked_by
                to_update.append(row)

        if to_update:
            Attendance.objects.bulk_update(to_update, ['status', 'remarks', 'marked_by'])
        if to_create:
            Attendance.objects.bulk_create(to_create)

    logger.info(
        'Attendance %s %s: %s created, %s updated, %s deleted',
        batch.code, session_date, len(to_create), len(to_update), deleted,
    )
    return len(to_create), len(to_update), deleted


def attendance_sheet(batch, session_date):
    """
    Active enrollments of *batch* paired with their status for the day:
    the stored status where one exists, otherwise ``present``.
    """
    stored = dict(
        Attendance.objects
        .filter(batch=batch, session_date=session_date)
        .values_list('enrollment_id', 'status')
    )
    enrollments = (
        batch.enrollments
        .filter(status=Enrollment.Status.ACTIVE)
        .select_related('student')
        .order_by('student__full_name')
    )
    return [
        (enrollment, stored.get(enrollment.pk, Attendance.Status.PRESENT))
        for enrollment in enrollments
    ]


def attendance_percentage(enrollment):
    """
    Share of recorded sessions the student attended (present or late), as a
    Decimal with two places, or None when nothing has been recorded.
    """
    rows = Attendance.objects.filter(enrollment=enrollment)
    total = rows.count()
    if not total:
        return None
    attended = rows.filter(status__in=ATTENDED_STATUSES).count()
    return (Decimal(attended) * 100 / total).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


# ── Certificates ──────────────────────────────────────────────────────────────

def issue_certificate(enrollment, issued_by=None, grade='', attendance=None,
                      completion_date=None, issue_date=None):
    """
    Issue a certificate for a *completed* enrollment.

    Course and batch names are copied onto the certificate.  When
    *attendance* is None the enrollment's recorded attendance rate is used.
    """
    if enrollment.status != Enrollment.Status.COMPLETED:
        raise CertificateError('Certificates can only be issued for completed enrollments.')

    batch = enrollment.batch
    if attendance is None:
        attendance = attendance_percentage(enrollment)

    with transaction.atomic():
        certificate = Certificate.objects.create(
            certificate_number=generate_certificate_number(),
            student=enrollment.student,
            enrollment=enrollment,
            branch=batch.branch or enrollment.student.branch,
            course_name=batch.course.name,
            batch_name=batch.name,
            grade=grade or '',
            attendance_percentage=attendance,
            issue_date=issue_date or timezone.localdate(),
            completion_date=completion_date or batch.end_date,
            issued_by=issued_by,
        )
    logger.info('Certificate %s issued to %s', certificate.certificate_number, enrollment.student.full_name)
    return certificate


def revoke_certificate(certificate, reason):
    if certificate.status == Certificate.Status.REVOKED:
        raise CertificateError('Certificate is already revoked.')
    certificate.status = Certificate.Status.REVOKED
    certificate.revoke_reason = reason
    certificate.save(update_fields=['status', 'revoke_reason', 'updated_at'])
    logger.info('Certificate %s revoked: %s', certificate.certificate_number, reason)
    return certificate


def verify_url_for(certificate, request=None):
    path = reverse('verify_certificate', args=[certificate.certificate_number])
    if request is not None:
        return request.build_absolute_uri(path)
    return settings.SITE_URL.rstrip('/') + path


def certificate_document(certificate, request=None):
    return CertificateData(
        certificate_number=certificate.certificate_number,
        student_name=certificate.student.full_name,
        course_name=certificate.course_name,
        batch_name=certificate.batch_name,
        issue_date=certificate.issue_date,
        grade=certificate.grade,
        attendance_percentage=certificate.attendance_percentage,
        completion_date=certificate.completion_date,
        status=certificate.status,
        verify_url=verify_url_for(certificate, request),
    )

"""
academics/models.py
───────────────────
Everything about teaching: what is taught, to whom, and how it went.

Course      – a training programme with duration and fee.
Batch       – a scheduled cohort of a Course with a trainer and capacity.
Student     – a learner, identified by a generated admission number.
Enrollment  – Student ↔ Batch link with status and fee tracking.
Attendance  – one mark per (batch, enrollment, session date).
Certificate – completion certificate; course / batch names are copied at
              issue time and never re-joined.
"""

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

ENROLLMENT_DUPLICATE_MESSAGE = 'Student is already enrolled in this batch'


class Course(models.Model):
    name = models.CharField(max_length=200)
    code = models.CharField(
        max_length=20,
        help_text='Short course code, stored upper-case (e.g. "FSWD").',
    )
    description = models.TextField(blank=True)
    duration_hours = models.PositiveIntegerField(default=0)
    duration_days = models.PositiveIntegerField(default=0)
    fee_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text='Course fee (₹). Leave empty if not fixed.',
    )
    syllabus = models.TextField(blank=True)
    branch = models.ForeignKey(
        'core.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='courses',
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Course'
        verbose_name_plural = 'Courses'

    def __str__(self):
        return f"{self.name} ({self.code})"


class Batch(models.Model):
    """
    A scheduled offering of a Course.
    """

    name = models.CharField(max_length=200)
    code = models.CharField(max_length=20)
    course = models.ForeignKey(
        Course,
        on_delete=models.PROTECT,
        related_name='batches',
    )
    trainer = models.ForeignKey(
        'accounts.StaffProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='batches',
    )
    branch = models.ForeignKey(
        'core.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='batches',
    )
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    schedule = models.CharField(
        max_length=200,
        blank=True,
        help_text='Free text, e.g. "Mon / Wed / Fri".',
    )
    timings = models.CharField(
        max_length=100,
        blank=True,
        help_text='Free text, e.g. "10:00 – 12:00".',
    )
    capacity = models.PositiveIntegerField(default=30)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Batch'
        verbose_name_plural = 'Batches'

    def __str__(self):
        return f"{self.name} ({self.code})"


class Student(models.Model):
    """
    A learner.  ``admission_number`` is generated when the record is first
    created (academics.services.generate_admission_number) and never edited.
    """

    admission_number = models.CharField(max_length=20, unique=True, editable=False)
    full_name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20)
    alternate_phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    guardian_name = models.CharField(max_length=200, blank=True)
    guardian_phone = models.CharField(max_length=20, blank=True)
    qualification = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    branch = models.ForeignKey(
        'core.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='students',
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Student'
        verbose_name_plural = 'Students'

    def __str__(self):
        return f"{self.full_name} ({self.admission_number})"


class Enrollment(models.Model):
    """
    Associates one Student with one Batch.  A (student, batch) pair may
    exist only once.
    """

    class Status(models.TextChoices):
        ACTIVE      = 'active',      'Active'
        COMPLETED   = 'completed',   'Completed'
        DROPPED     = 'dropped',     'Dropped'
        TRANSFERRED = 'transferred', 'Transferred'

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    enrollment_date = models.DateField(default=timezone.localdate)
    fee_paid = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    fee_pending = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    notes = models.TextField(blank=True)
    enrolled_by = models.ForeignKey(
        'accounts.StaffProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='enrollments_made',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Enrollment'
        verbose_name_plural = 'Enrollments'
        constraints = [
            models.UniqueConstraint(fields=['student', 'batch'], name='uq_enrollment_student_batch'),
        ]

    def __str__(self):
        return f"{self.student.full_name} → {self.batch.name} ({self.get_status_display()})"

    def unique_error_message(self, model_class, unique_check):
        if model_class is Enrollment and set(unique_check) == {'student', 'batch'}:
            return ValidationError(ENROLLMENT_DUPLICATE_MESSAGE, code='unique_together')
        return super().unique_error_message(model_class, unique_check)


class Attendance(models.Model):
    class Status(models.TextChoices):
        PRESENT = 'present', 'Present'
        ABSENT  = 'absent',  'Absent'
        LATE    = 'late',    'Late'
        EXCUSED = 'excused', 'Excused'

    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='attendance',
    )
    enrollment = models.ForeignKey(
        Enrollment,
        on_delete=models.CASCADE,
        related_name='attendance',
    )
    session_date = models.DateField()
    session_number = models.PositiveIntegerField(null=True, blank=True)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PRESENT,
    )
    remarks = models.CharField(max_length=255, blank=True)
    marked_by = models.ForeignKey(
        'accounts.StaffProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendance_marked',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-session_date', 'enrollment']
        verbose_name = 'Attendance'
        verbose_name_plural = 'Attendance'
        constraints = [
            models.UniqueConstraint(
                fields=['batch', 'enrollment', 'session_date'],
                name='uq_attendance_batch_enrollment_date',
            ),
        ]

    def __str__(self):
        return f"{self.enrollment.student.full_name} {self.session_date}: {self.get_status_display()}"


class Certificate(models.Model):
    """
    Completion certificate.  ``certificate_number`` always comes from
    core.numbering.generate_certificate_number().
    """

    class Status(models.TextChoices):
        ISSUED  = 'issued',  'Issued'
        REVOKED = 'revoked', 'Revoked'

    certificate_number = models.CharField(max_length=40, unique=True, editable=False)
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='certificates',
    )
    enrollment = models.ForeignKey(
        Enrollment,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='certificates',
    )
    branch = models.ForeignKey(
        'core.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='certificates',
    )
    course_name = models.CharField(max_length=200)
    batch_name = models.CharField(max_length=200)
    grade = models.CharField(max_length=20, blank=True)
    attendance_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    issue_date = models.DateField(default=timezone.localdate)
    completion_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.ISSUED,
    )
    revoke_reason = models.TextField(blank=True)
    issued_by = models.ForeignKey(
        'accounts.StaffProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='certificates_issued',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Certificate'
        verbose_name_plural = 'Certificates'

    def __str__(self):
        return f"{self.certificate_number} – {self.student.full_name}"

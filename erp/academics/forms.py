"""
academics/forms.py
──────────────────
Forms for students, courses, batches, enrollments, the attendance sheet
picker and certificate issuing.
"""

from decimal import Decimal

from django import forms
from django.db.models import Q
from django.utils import timezone

from accounts.models import StaffProfile

from .models import Batch, Course, Enrollment, Student

_DATE = {'type': 'date'}


def _date_widget():
    return forms.DateInput(attrs=_DATE, format='%Y-%m-%d')


class StudentForm(forms.ModelForm):
    """The admission number is assigned on first save and never shown here."""

    class Meta:
        model  = Student
        fields = [
            'full_name', 'email', 'phone', 'alternate_phone', 'date_of_birth', 'gender',
            'address', 'guardian_name', 'guardian_phone', 'qualification', 'branch',
            'notes', 'is_active',
        ]
        widgets = {
            'date_of_birth': _date_widget(),
            'address':       forms.Textarea(attrs={'rows': 2}),
            'notes':         forms.Textarea(attrs={'rows': 2}),
            'gender':        forms.Select(choices=[
                ('', '—'), ('male', 'Male'), ('female', 'Female'), ('other', 'Other'),
            ]),
        }


class CourseForm(forms.ModelForm):
    class Meta:
        model  = Course
        fields = [
            'name', 'code', 'description', 'duration_hours', 'duration_days',
            'fee_amount', 'syllabus', 'branch', 'is_active',
        ]
        widgets = {
            'name':        forms.TextInput(attrs={'placeholder': 'e.g. Full Stack Web Development'}),
            'code':        forms.TextInput(attrs={'placeholder': 'e.g. FSWD'}),
            'description': forms.Textarea(attrs={'rows': 3}),
            'syllabus':    forms.Textarea(attrs={'rows': 5}),
            'fee_amount':  forms.NumberInput(attrs={'step': '0.01', 'min': '0', 'placeholder': '0.00'}),
        }
        labels = {
            'duration_hours': 'Duration (hours)',
            'duration_days':  'Duration (days)',
            'fee_amount':     'Fee (₹)',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # A blank duration means zero
        self.fields['duration_hours'].required = False
        self.fields['duration_days'].required = False

    def clean_code(self):
        return self.cleaned_data['code'].strip().upper()

    def clean_duration_hours(self):
        return self.cleaned_data.get('duration_hours') or 0

    def clean_duration_days(self):
        return self.cleaned_data.get('duration_days') or 0


class BatchForm(forms.ModelForm):
    class Meta:
        model  = Batch
        fields = [
            'name', 'code', 'course', 'trainer', 'branch', 'start_date', 'end_date',
            'schedule', 'timings', 'capacity', 'is_active',
        ]
        widgets = {
            'start_date': _date_widget(),
            'end_date':   _date_widget(),
            'schedule':   forms.TextInput(attrs={'placeholder': 'e.g. Mon / Wed / Fri'}),
            'timings':    forms.TextInput(attrs={'placeholder': 'e.g. 10:00 – 12:00'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # the current course stays selectable even if it was deactivated
        current = Q(pk=self.instance.course_id) if self.instance.pk else Q(pk__in=[])
        self.fields['course'].queryset = Course.objects.filter(Q(is_active=True) | current).order_by('name')
        self.fields['trainer'].queryset = StaffProfile.objects.filter(is_active=True).order_by('full_name')

    def clean_code(self):
        return self.cleaned_data['code'].strip().upper()

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get('start_date'), cleaned.get('end_date')
        if start and end and end < start:
            self.add_error('end_date', 'End date cannot be before the start date.')
        return cleaned


class EnrollmentForm(forms.ModelForm):
    """
    Enrol a student into a batch.  A second enrollment for the same pair is
    rejected by validate_unique with the "already enrolled" message.
    """

    class Meta:
        model  = Enrollment
        fields = ['student', 'batch', 'enrollment_date', 'status', 'fee_paid', 'fee_pending', 'notes']
        widgets = {
            'enrollment_date': _date_widget(),
            'fee_paid':        forms.NumberInput(attrs={'step': '0.01', 'min': '0'}),
            'fee_pending':     forms.NumberInput(attrs={'step': '0.01', 'min': '0'}),
            'notes':           forms.Textarea(attrs={'rows': 2}),
        }
        labels = {
            'fee_paid':    'Fee paid (₹)',
            'fee_pending': 'Fee pending (₹)',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            student_q = Q(is_active=True) | Q(pk=self.instance.student_id)
            batch_q = Q(is_active=True) | Q(pk=self.instance.batch_id)
        else:
            student_q = batch_q = Q(is_active=True)
        self.fields['student'].queryset = Student.objects.filter(student_q).order_by('full_name')
        self.fields['batch'].queryset = Batch.objects.filter(batch_q).select_related('course').order_by('name')
        self.fields['fee_paid'].required = False
        self.fields['fee_pending'].required = False
        if not self.instance.pk:
            self.fields['status'].widget = forms.HiddenInput()
            self.fields['status'].required = False
            self.initial.setdefault('status', Enrollment.Status.ACTIVE)

    def clean_status(self):
        return self.cleaned_data.get('status') or Enrollment.Status.ACTIVE

    def clean(self):
        cleaned = super().clean()
        for field in ('fee_paid', 'fee_pending'):
            value = cleaned.get(field)
            if value is None and field not in self.errors:
                cleaned[field] = Decimal('0')
            elif value is not None and value < 0:
                self.add_error(field, 'Amount cannot be negative.')
        return cleaned


class AttendancePickerForm(forms.Form):
    """Which sheet to show: an active batch and a day (today by default)."""

    batch = forms.ModelChoiceField(
        queryset=Batch.objects.filter(is_active=True).order_by('name'),
        empty_label='— select batch —',
    )
    session_date = forms.DateField(
        label='Date',
        initial=timezone.localdate,
        widget=_date_widget(),
        input_formats=['%Y-%m-%d'],
    )


class CertificateIssueForm(forms.Form):
    enrollment = forms.ModelChoiceField(
        queryset=Enrollment.objects.none(),
        empty_label='— select completed enrollment —',
        help_text='Only completed enrollments can receive a certificate.',
    )
    grade = forms.CharField(max_length=20, required=False, widget=forms.TextInput(attrs={'placeholder': 'e.g. A+'}))
    attendance_percentage = forms.DecimalField(
        label='Attendance %',
        required=False,
        min_value=0,
        max_value=100,
        max_digits=5,
        decimal_places=2,
        help_text='Leave blank to use the recorded attendance rate.',
    )
    completion_date = forms.DateField(required=False, widget=_date_widget(), input_formats=['%Y-%m-%d'])
    issue_date = forms.DateField(initial=timezone.localdate, widget=_date_widget(), input_formats=['%Y-%m-%d'])

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['enrollment'].queryset = (
            Enrollment.objects
            .filter(status=Enrollment.Status.COMPLETED)
            .select_related('student', 'batch', 'batch__course')
            .order_by('student__full_name')
        )
        self.fields['enrollment'].label_from_instance = (
            lambda e: f"{e.student.full_name} ({e.student.admission_number}) – {e.batch.course.name} / {e.batch.name}"
        )

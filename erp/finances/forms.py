"""
finances/forms.py
─────────────────
Receipt entry form.
"""

from django import forms
from django.utils import timezone

from academics.models import Enrollment, Student

from .models import Receipt


class ReceiptForm(forms.ModelForm):
    """
    New receipt.  The enrollment, when given, must be one of the chosen
    student's active enrollments.
    """

    class Meta:
        model  = Receipt
        fields = [
            'student', 'enrollment', 'amount', 'payment_mode', 'receipt_type',
            'payment_date', 'description', 'remarks',
        ]
        widgets = {
            'amount':       forms.NumberInput(attrs={'step': '0.01', 'min': '0.01', 'placeholder': '0.00'}),
            'payment_date': forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'),
            'description':  forms.TextInput(attrs={'placeholder': 'e.g. First instalment'}),
            'remarks':      forms.Textarea(attrs={'rows': 2}),
        }
        labels = {
            'amount': 'Amount (₹)',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['student'].queryset = Student.objects.filter(is_active=True).order_by('full_name')
        self.fields['enrollment'].queryset = (
            Enrollment.objects
            .filter(status=Enrollment.Status.ACTIVE)
            .select_related('student', 'batch')
        )
        self.fields['enrollment'].required = False
        self.fields['enrollment'].empty_label = '— no specific enrollment —'
        self.fields['enrollment'].label_from_instance = (
            lambda e: f"{e.student.admission_number} – {e.batch.name}"
        )
        self.fields['payment_date'].input_formats = ['%Y-%m-%d']
        self.initial.setdefault('payment_date', timezone.localdate())

    def clean(self):
        cleaned = super().clean()
        student, enrollment = cleaned.get('student'), cleaned.get('enrollment')
        if student and enrollment and enrollment.student_id != student.pk:
            self.add_error('enrollment', 'This enrollment belongs to a different student.')
        return cleaned

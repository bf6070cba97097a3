"""
core/forms.py
─────────────
Branch form, the three settings forms and the shared reason prompt.
"""

from django import forms

from .models import Branch


class BranchForm(forms.ModelForm):
    class Meta:
        model  = Branch
        fields = ['name', 'code', 'address', 'phone', 'email', 'is_active']
        widgets = {
            'name':    forms.TextInput(attrs={'placeholder': 'e.g. Hyderabad – Ameerpet'}),
            'code':    forms.TextInput(attrs={'placeholder': 'e.g. HYD'}),
            'address': forms.Textarea(attrs={'rows': 2}),
        }

    def clean_code(self):
        return self.cleaned_data['code'].strip().upper()


class ReasonForm(forms.Form):
    """Why a receipt is voided / refunded or a certificate revoked."""

    reason = forms.CharField(
        max_length=500,
        widget=forms.Textarea(attrs={'rows': 2, 'placeholder': 'Reason…'}),
    )


# ── Settings screen ───────────────────────────────────────────────────────────
# Field names match the keys of the JSON blobs in core.services.DEFAULTS.

class InstituteSettingsForm(forms.Form):
    name = forms.CharField(label='Institute name', max_length=200)
    subtitle = forms.CharField(max_length=200, required=False)
    address = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 2}))
    phone = forms.CharField(max_length=20, required=False)
    email = forms.EmailField(required=False)


class ReceiptSettingsForm(forms.Form):
    prefix = forms.RegexField(
        label='Receipt number prefix',
        regex=r'^[A-Za-z]{1,10}$',
        error_messages={'invalid': 'Use 1–10 letters.'},
    )
    academy_name = forms.CharField(label='Academy name (GA receipts)', max_length=200)
    academy_subtitle = forms.CharField(label='Academy subtitle', max_length=200, required=False)
    footer_note = forms.CharField(max_length=200, required=False)


class CertificateSettingsForm(forms.Form):
    prefix = forms.RegexField(
        label='Certificate number prefix',
        regex=r'^[A-Za-z]{1,10}$',
        error_messages={'invalid': 'Use 1–10 letters.'},
    )
    left_signatory = forms.CharField(label='Left signatory', max_length=100)
    right_signatory = forms.CharField(label='Right signatory', max_length=100)

"""
accounts/forms.py
─────────────────
Sign-in / sign-up, own-profile editing and staff management forms.
"""

from django import forms
from django.contrib.auth import get_user_model, password_validation

from core.models import Branch

from .models import StaffProfile, StaffRole

PASSWORD_MIN_LENGTH = 6


def _password_field(label='Password'):
    return forms.CharField(
        label=label,
        min_length=PASSWORD_MIN_LENGTH,
        strip=False,
        widget=forms.PasswordInput(attrs={'autocomplete': 'current-password'}),
        error_messages={'min_length': f'Password must be at least {PASSWORD_MIN_LENGTH} characters'},
    )


class SignInForm(forms.Form):
    email = forms.EmailField(
        label='Email',
        error_messages={'invalid': 'Please enter a valid email address'},
        widget=forms.EmailInput(attrs={'placeholder': 'you@example.com', 'autofocus': True}),
    )
    password = _password_field()


class SignUpForm(forms.Form):
    """
    Self-service registration.  The account is created without roles; an
    admin assigns them later from the Staff screen.
    """

    full_name = forms.CharField(
        label='Full name',
        min_length=2,
        max_length=100,
        error_messages={
            'min_length': 'Name must be at least 2 characters',
            'max_length': 'Name must be at most 100 characters',
        },
    )
    email = forms.EmailField(
        label='Email',
        error_messages={'invalid': 'Please enter a valid email address'},
    )
    password = _password_field()
    confirm_password = forms.CharField(
        label='Confirm password',
        strip=False,
        widget=forms.PasswordInput(attrs={'autocomplete': 'new-password'}),
    )

    def clean_password(self):
        password = self.cleaned_data['password']
        password_validation.validate_password(password)
        return password

    def clean(self):
        cleaned = super().clean()
        password = cleaned.get('password')
        confirm = cleaned.get('confirm_password')
        if password and confirm and password != confirm:
            self.add_error('confirm_password', "Passwords don't match")
        return cleaned


class ProfileForm(forms.ModelForm):
    class Meta:
        model  = StaffProfile
        fields = ['full_name', 'phone', 'designation']
        widgets = {
            'phone':       forms.TextInput(attrs={'placeholder': '+91 98765 43210'}),
            'designation': forms.TextInput(attrs={'placeholder': 'e.g. Senior Trainer'}),
        }


def _roles_field():
    return forms.MultipleChoiceField(
        choices=StaffRole.choices,
        required=False,
        widget=forms.CheckboxSelectMultiple,
        help_text='Users without any role can sign in but cannot change data.',
    )


class StaffCreateForm(forms.Form):
    """Admin form that creates a login, its staff profile and its roles at once."""

    full_name = forms.CharField(max_length=200)
    email = forms.EmailField()
    password = _password_field(label='Initial password')
    phone = forms.CharField(max_length=20, required=False)
    designation = forms.CharField(max_length=100, required=False)
    branch = forms.ModelChoiceField(
        queryset=Branch.objects.filter(is_active=True),
        required=False,
        empty_label='— no branch —',
    )
    roles = _roles_field()

    field_order = ['full_name', 'email', 'password', 'phone', 'designation', 'branch', 'roles']

    def clean_email(self):
        email = self.cleaned_data['email'].strip().lower()
        if get_user_model().objects.filter(email=email).exists():
            raise forms.ValidationError('This email is already registered')
        return email


class StaffEditForm(forms.ModelForm):
    """
    Edit a staff member's profile and roles.  Pass ``editor`` (the signed-in
    user) so that admins cannot deactivate themselves or drop their own
    admin role.
    """

    roles = _roles_field()

    class Meta:
        model  = StaffProfile
        fields = ['full_name', 'phone', 'designation', 'branch', 'is_active']

    def __init__(self, *args, editor=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.editor = editor
        self.fields['branch'].required = False
        self.fields['branch'].empty_label = '— no branch —'
        if self.instance.pk and not self.is_bound:
            self.initial['roles'] = list(
                self.instance.user.roles.values_list('role', flat=True)
            )

    def clean(self):
        cleaned = super().clean()
        if self.editor is None or self.instance.user_id != self.editor.pk:
            return cleaned
        if not cleaned.get('is_active', True):
            self.add_error('is_active', 'You cannot deactivate your own account.')
        held = set(self.instance.user.roles.values_list('role', flat=True))
        if StaffRole.ADMIN in held and StaffRole.ADMIN not in cleaned.get('roles', [StaffRole.ADMIN]):
            self.add_error('roles', 'You cannot remove your own admin role.')
        return cleaned

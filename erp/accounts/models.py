"""
accounts/models.py
──────────────────
Identity and staff models.

User         – extends AbstractUser; signs in with the e-mail address.
StaffProfile – the staff record behind a login: employee id, contact
               details, home branch.
UserRole     – (user, role) pairs; a user may hold any number of roles.
"""

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model for the institute ERP.

    The username is always the lower-cased e-mail address so staff sign in
    with the address they were registered under.  Roles live in UserRole,
    not on this model.
    """

    email = models.EmailField(unique=True, verbose_name='Email address')

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
            self.username = self.email
        super().save(*args, **kwargs)

    def __str__(self):
        return self.get_full_name() or self.email or self.username


class StaffRole(models.TextChoices):
    ADMIN          = 'admin',          'Admin'
    BRANCH_MANAGER = 'branch_manager', 'Branch Manager'
    TRAINER        = 'trainer',        'Trainer'
    ACCOUNTS       = 'accounts',       'Accounts'
    RECEPTION      = 'reception',      'Reception'


class StaffProfile(models.Model):
    """
    Staff record linked one-to-one to a login.

    Created automatically for every new User (see accounts/signals.py) so
    that sign-up and admin-created accounts always have a profile row.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='staff_profile',
    )
    employee_id = models.CharField(
        max_length=20,
        unique=True,
        help_text='Unique employee code, e.g. "EMP0007".',
    )
    full_name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=20, blank=True)
    designation = models.CharField(max_length=100, blank=True)
    branch = models.ForeignKey(
        'core.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='staff',
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['full_name']
        verbose_name = 'Staff Profile'
        verbose_name_plural = 'Staff Profiles'

    def __str__(self):
        return f"{self.full_name} ({self.employee_id})"


class UserRole(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='roles',
    )
    role = models.CharField(max_length=20, choices=StaffRole.choices)

    class Meta:
        ordering = ['user', 'role']
        verbose_name = 'User Role'
        verbose_name_plural = 'User Roles'
        constraints = [
            models.UniqueConstraint(fields=['user', 'role'], name='uq_user_role'),
        ]

    def __str__(self):
        return f"{self.user} – {self.get_role_display()}"

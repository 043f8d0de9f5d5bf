"""
Custom User model for workforce_reports.

Users are the employees that reports are scoped to and that file idle
accountability reasons. Authentication itself is handled upstream; this
model only carries identity, role and department.

CRITICAL: AUTH_USER_MODEL must point here before running any migrations.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """
    Custom user manager where email is the unique identifier
    for authentication instead of username.
    """

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular user with the given email and password."""
        if not email:
            raise ValueError('The Email field must be set')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a SuperUser with the given email and password."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', User.Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Employee identity with role-based report access.

    Roles:
    - Admin: every report, idle accountability admin listing
    - Senior Manager 1/2: every report, idle accountability admin listing
    - Manager: Consolidated Time Log only
    - Employee: own idle accountability items only

    Roles are turned into a capability set once, by
    apps.accounts.capabilities.resolve_capabilities.
    """

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        SENIOR_MANAGER_1 = 'senior_manager_1', 'Senior Manager 1'
        SENIOR_MANAGER_2 = 'senior_manager_2', 'Senior Manager 2'
        MANAGER = 'manager', 'Manager'
        EMPLOYEE = 'employee', 'Employee'

    # Remove username field, use email instead
    username = None
    email = models.EmailField(
        'email address',
        unique=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.EMPLOYEE,
        db_index=True,
    )
    department = models.ForeignKey(
        'departments.Department',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = 'user'
        verbose_name_plural = 'users'
        ordering = ['first_name', 'last_name']
        indexes = [
            models.Index(fields=['email']),
            models.Index(fields=['role']),
            models.Index(fields=['department']),
        ]

    def __str__(self):
        return f"{self.get_full_name()} ({self.email})"

    def get_full_name(self):
        """Return the first_name plus the last_name, with a space in between."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    def get_short_name(self):
        """Return the short name for the user."""
        return self.first_name or self.email.split('@')[0]

    @property
    def department_name(self):
        """Department name, or 'Unassigned' when the user has none."""
        return self.department.name if self.department_id else 'Unassigned'

"""
Accounts models
NoteShare - Department Note-Sharing Portal

- User: email-login account carrying the role and department profile
- UserActivity: per-user activity trail (login, upload, download, ...)
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone


class UserManager(BaseUserManager):
    """Manager for the email-login User model."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('An email address is required.')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        extra_fields.setdefault('role', User.Role.STUDENT)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.Role.ADMIN)
        extra_fields.setdefault('name', email.split('@')[0])

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self._create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Portal user and profile in one row.

    The role decides which dashboard and which mutations the user can
    reach. Students read the notes of their department; faculty upload
    into theirs; admins manage everything.
    """

    class Role(models.TextChoices):
        STUDENT = 'student', 'Student'
        FACULTY = 'faculty', 'Faculty'
        ADMIN = 'admin', 'Admin'

    # Roles a visitor may pick on the registration form
    SELF_SERVICE_ROLES = (Role.STUDENT, Role.FACULTY)

    email = models.EmailField(unique=True, verbose_name='Email')
    name = models.CharField(max_length=150, verbose_name='Name')
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STUDENT,
        verbose_name='Role'
    )
    department = models.ForeignKey(
        'departments.Department',
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='members',
        verbose_name='Department'
    )
    mobile_number = models.CharField(max_length=20, blank=True, verbose_name='Mobile number')
    subject_taught = models.CharField(
        max_length=150,
        blank=True,
        verbose_name='Subject taught',
        help_text='Faculty only'
    )

    is_active = models.BooleanField(default=True, verbose_name='Active')
    is_staff = models.BooleanField(default=False, verbose_name='Staff')
    date_joined = models.DateTimeField(default=timezone.now, verbose_name='Date joined')

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(Lower('email'), name='user_email_ci_unique'),
        ]

    def __str__(self):
        return f'{self.display_name} ({self.email})'

    def clean(self):
        super().clean()
        self.email = (self.email or '').strip().lower()

    def save(self, *args, **kwargs):
        # Stored lowercased; login matches it exactly
        self.email = (self.email or '').strip().lower()
        super().save(*args, **kwargs)

    @property
    def display_name(self):
        return self.name or self.email

    @property
    def department_name(self):
        return self.department.name if self.department_id else ''

    def get_full_name(self):
        return self.display_name

    def get_short_name(self):
        return self.display_name

    def is_student(self):
        return self.role == self.Role.STUDENT

    def is_faculty(self):
        return self.role == self.Role.FACULTY

    def is_admin(self):
        return self.role == self.Role.ADMIN or self.is_superuser

    def has_complete_profile(self):
        """Students and faculty need a department before using their dashboard."""
        if self.is_admin():
            return True
        return self.department_id is not None


class UserActivity(models.Model):
    """Activity trail shown on the profile page."""

    ACTIVITY_TYPES = [
        ('login', 'Login'),
        ('logout', 'Logout'),
        ('register', 'Registration'),
        ('upload', 'Note upload'),
        ('download', 'Note download'),
        ('view', 'Note preview'),
        ('quiz', 'Quiz generation'),
        ('profile_update', 'Profile update'),
        ('password_change', 'Password change'),
    ]

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='activities',
        verbose_name='User'
    )
    activity_type = models.CharField(max_length=30, choices=ACTIVITY_TYPES, verbose_name='Activity')
    description = models.CharField(max_length=255, blank=True, verbose_name='Description')
    note_id = models.PositiveBigIntegerField(null=True, blank=True, verbose_name='Note ID')
    ip_address = models.GenericIPAddressField(null=True, blank=True, verbose_name='IP address')
    user_agent = models.TextField(blank=True, verbose_name='User agent')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='When')

    class Meta:
        db_table = 'user_activities'
        verbose_name = 'User activity'
        verbose_name_plural = 'User activities'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.user.display_name} - {self.get_activity_type_display()}'

    @classmethod
    def record(cls, request, activity_type, description='', note_id=None, user=None):
        """Defaults to the request's user; registration passes the new account."""
        return cls.objects.create(
            user=user or request.user,
            activity_type=activity_type,
            description=description,
            note_id=note_id,
            ip_address=get_client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
        )


def get_client_ip(request):
    """Client IP, honouring X-Forwarded-For."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')

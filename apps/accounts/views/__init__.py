"""
Views Package
NoteShare - Department Note-Sharing Portal

Views are grouped by purpose:
- mixins.py: role gates
- auth.py: registration, login/logout, password reset
- profile.py: profile and password change
- management.py: admin user management
"""

from .mixins import (
    AdminRequiredMixin,
    FacultyRequiredMixin,
    StudentRequiredMixin,
)

from .auth import (
    RegisterView,
    LoginView,
    LogoutView,
    PasswordResetRequestView,
    PasswordResetConfirmView,
)

from .profile import (
    ProfileView,
    ChangePasswordView,
)

from .management import (
    UserRowsView,
    UserDeleteView,
)

__all__ = [
    # Mixins
    'AdminRequiredMixin',
    'FacultyRequiredMixin',
    'StudentRequiredMixin',
    # Auth
    'RegisterView',
    'LoginView',
    'LogoutView',
    'PasswordResetRequestView',
    'PasswordResetConfirmView',
    # Profile
    'ProfileView',
    'ChangePasswordView',
    # Management
    'UserRowsView',
    'UserDeleteView',
]

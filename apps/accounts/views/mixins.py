"""
Access Control Mixins
NoteShare - Department Note-Sharing Portal

Role gates for class-based views. This module imports nothing from the
project so any app can use it without circular imports.
"""

from django.contrib.auth.mixins import UserPassesTestMixin


class AdminRequiredMixin(UserPassesTestMixin):
    """
    Allow admins only.

    Example:
        class AdminDashboardView(LoginRequiredMixin, AdminRequiredMixin, TemplateView):
            template_name = 'core/admin_dashboard.html'
    """

    def test_func(self):
        return self.request.user.is_authenticated and self.request.user.is_admin()


class FacultyRequiredMixin(UserPassesTestMixin):
    """Allow faculty members only."""

    def test_func(self):
        return self.request.user.is_authenticated and self.request.user.is_faculty()


class StudentRequiredMixin(UserPassesTestMixin):
    """Allow students only."""

    def test_func(self):
        return self.request.user.is_authenticated and self.request.user.is_student()

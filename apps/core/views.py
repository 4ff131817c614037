"""
Core Views
NoteShare - Department Note-Sharing Portal

- Home page
- Dashboard redirect (each role lands on its own dashboard)
- Admin dashboard: stats cards plus HTMX tabs for users, notes and departments
"""

import logging

from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import redirect, render
from django.views import View
from django.views.generic import TemplateView

from apps.accounts.views.mixins import AdminRequiredMixin
from apps.notes.services import NoteService

logger = logging.getLogger('core')


class HomeView(TemplateView):
    template_name = 'core/home.html'

    def get(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            return redirect('core:dashboard_redirect')
        return super().get(request, *args, **kwargs)


class DashboardRedirectView(LoginRequiredMixin, View):
    """Send the user to the dashboard of their role."""

    def get(self, request):
        user = request.user
        if user.is_admin():
            return redirect('core:admin_dashboard')
        if user.is_faculty():
            return redirect('notes:faculty_dashboard')
        if user.is_student():
            return redirect('notes:student_dashboard')
        logger.warning(f"User {user.email} has no dashboard for role '{user.role}'")
        return redirect('accounts:profile')


class AdminDashboardView(LoginRequiredMixin, AdminRequiredMixin, TemplateView):
    template_name = 'core/admin_dashboard.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['stats'] = NoteService.stats()
        context['active_tab'] = self.request.GET.get('tab', 'users')
        context['active_page'] = 'dashboard'
        return context


class AdminStatsView(LoginRequiredMixin, AdminRequiredMixin, View):
    """HTMX: stats cards, re-fetched on any table change."""

    def get(self, request):
        return render(request, 'core/partials/stats.html', {'stats': NoteService.stats()})

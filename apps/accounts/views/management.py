"""
User Management Views (admin)
NoteShare - Department Note-Sharing Portal

- HTMX fragment listing every user with their department
- Deleting a user (never the acting admin)
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View

from apps.core.models import AuditLog
from ..models import User
from ..services import UserDeletionError, UserService
from .mixins import AdminRequiredMixin

logger = logging.getLogger('accounts')


class UserRowsView(LoginRequiredMixin, AdminRequiredMixin, View):
    """HTMX: user table, re-fetched on "profiles-changed"."""

    def get(self, request):
        return render(request, 'accounts/partials/user_rows.html', {
            'users': UserService.list_users(),
        })


class UserDeleteView(LoginRequiredMixin, AdminRequiredMixin, View):

    def post(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        user_id, user_repr = user.pk, str(user)
        try:
            UserService.delete_user(request.user, user)
        except UserDeletionError as e:
            logger.warning(f"Refused delete of user {user_id} by {request.user.email}: {e}")
            messages.error(request, str(e))
            return redirect('core:admin_dashboard')

        AuditLog.log(
            user=request.user,
            action='delete',
            model_name='User',
            object_id=user_id,
            object_repr=user_repr,
            request=request,
        )
        messages.success(request, 'User deleted successfully.')
        return redirect('core:admin_dashboard')

"""
Profile Views
NoteShare - Department Note-Sharing Portal

- View and edit the profile (one page)
- Change password while staying logged in
"""

from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import redirect, render
from django.views import View

from ..forms import NewPasswordForm, ProfileUpdateForm
from ..models import UserActivity


class ProfileView(LoginRequiredMixin, View):
    """
    Combined profile page.

    GET shows the user's details and the edit form; POST saves them.
    Choosing no department clears it, which sends students back to the
    "complete your profile" prompt.
    """
    template_name = 'accounts/profile.html'

    def _render(self, request, form):
        return render(request, self.template_name, {
            'form': form,
            'recent_activities': request.user.activities.all()[:10],
            'active_page': 'profile',
        })

    def get(self, request):
        return self._render(request, ProfileUpdateForm(instance=request.user))

    def post(self, request):
        form = ProfileUpdateForm(request.POST, instance=request.user)
        if form.is_valid():
            form.save()
            UserActivity.record(request, 'profile_update', 'Profile updated')
            messages.success(request, 'Profile updated successfully.')
            return redirect('accounts:profile')
        return self._render(request, form)


class ChangePasswordView(LoginRequiredMixin, View):
    template_name = 'accounts/change_password.html'

    def get(self, request):
        return render(request, self.template_name, {
            'form': NewPasswordForm(request.user),
            'active_page': 'change_password',
        })

    def post(self, request):
        form = NewPasswordForm(request.user, request.POST)
        if form.is_valid():
            form.save()
            update_session_auth_hash(request, request.user)
            UserActivity.record(request, 'password_change', 'Password changed')
            messages.success(request, 'Password updated successfully.')
            return redirect('accounts:profile')

        return render(request, self.template_name, {
            'form': form,
            'active_page': 'change_password',
        })

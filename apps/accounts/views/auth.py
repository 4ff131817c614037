"""
Authentication Views
NoteShare - Department Note-Sharing Portal

This module contains the views for:
- Registration (student or faculty)
- Login / logout by email
- Password reset by emailed link
"""

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import send_mail
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.utils.encoding import force_bytes, force_str
from django.utils.http import url_has_allowed_host_and_scheme, urlsafe_base64_decode, urlsafe_base64_encode
from django.views import View
from django.views.decorators.csrf import ensure_csrf_cookie

from ..forms import LoginForm, NewPasswordForm, PasswordResetRequestForm, RegisterForm
from ..models import User, UserActivity

logger = logging.getLogger('accounts')


# ========== Registration ==========

class RegisterView(View):
    """
    Self-service registration.

    Visitors choose to be a student or a faculty member; the department is
    picked later from the profile page.
    """
    template_name = 'accounts/register.html'

    def get(self, request):
        if request.user.is_authenticated:
            return redirect('core:dashboard_redirect')
        return render(request, self.template_name, {'form': RegisterForm()})

    def post(self, request):
        form = RegisterForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info(f"New {user.role} account registered: {user.email}")
            UserActivity.record(request, 'register', f'Registered as {user.role}', user=user)
            messages.success(request, 'Registration successful. You can now log in.')
            return redirect('accounts:login')
        return render(request, self.template_name, {'form': form})


# ========== Login / Logout ==========

@method_decorator(ensure_csrf_cookie, name='dispatch')
class LoginView(View):
    """
    Email + password login.

    - Inactive accounts are rejected by the form
    - Without "remember me" the session ends when the browser closes
    - Redirects to ?next= when it is a safe local URL, else the role dashboard
    """
    template_name = 'accounts/login.html'

    def get(self, request):
        if request.user.is_authenticated:
            return redirect('core:dashboard_redirect')
        return render(request, self.template_name, {'form': LoginForm()})

    def post(self, request):
        form = LoginForm(request, data=request.POST)
        if form.is_valid():
            user = form.get_user()
            login(request, user)
            UserActivity.record(request, 'login')

            if not form.cleaned_data.get('remember_me'):
                request.session.set_expiry(0)

            messages.success(request, f'Welcome back, {user.display_name}!')

            next_url = request.GET.get('next') or request.POST.get('next')
            if next_url and url_has_allowed_host_and_scheme(
                next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
            ):
                return redirect(next_url)
            return redirect('core:dashboard_redirect')

        logger.warning(f"Failed login for {request.POST.get('username', '')!r}")
        return render(request, self.template_name, {'form': form})


class LogoutView(View):
    """Record the logout and end the session."""

    def post(self, request):
        if request.user.is_authenticated:
            UserActivity.record(request, 'logout')
            logout(request)
            messages.success(request, 'You have been logged out.')
        return redirect('accounts:login')

    get = post


# ========== Password Reset ==========

class PasswordResetRequestView(View):
    """
    Ask for a password reset link.

    The response is the same whether or not the email is registered.
    """
    template_name = 'accounts/password_reset/request.html'

    def get(self, request):
        return render(request, self.template_name, {'form': PasswordResetRequestForm()})

    def post(self, request):
        form = PasswordResetRequestForm(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {'form': form})

        user = form.user
        if user is not None:
            reset_url = request.build_absolute_uri(reverse(
                'accounts:password_reset_confirm',
                kwargs={
                    'uidb64': urlsafe_base64_encode(force_bytes(user.pk)),
                    'token': default_token_generator.make_token(user),
                }
            ))
            send_mail(
                subject='Reset your NoteShare password',
                message=(
                    f'Hello {user.display_name},\n\n'
                    f'Use the link below to choose a new password:\n\n{reset_url}\n\n'
                    f'If you did not ask for this, you can ignore this email.'
                ),
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[user.email],
                fail_silently=False,
            )
            logger.info(f"Password reset link sent to {user.email}")

        messages.success(request, 'If that email is registered, a reset link has been sent to it.')
        return redirect('accounts:login')


class PasswordResetConfirmView(View):
    """Choose a new password from an emailed link."""
    template_name = 'accounts/password_reset/confirm.html'

    def _get_user(self, uidb64, token):
        try:
            uid = force_str(urlsafe_base64_decode(uidb64))
            user = User.objects.get(pk=uid)
        except (TypeError, ValueError, OverflowError, User.DoesNotExist):
            return None
        if not default_token_generator.check_token(user, token):
            return None
        return user

    def get(self, request, uidb64, token):
        user = self._get_user(uidb64, token)
        if user is None:
            messages.error(request, 'The reset link is invalid or has expired.')
            return redirect('accounts:password_reset_request')
        return render(request, self.template_name, {'form': NewPasswordForm(user)})

    def post(self, request, uidb64, token):
        user = self._get_user(uidb64, token)
        if user is None:
            messages.error(request, 'The reset link is invalid or has expired.')
            return redirect('accounts:password_reset_request')

        form = NewPasswordForm(user, request.POST)
        if form.is_valid():
            form.save()
            logger.info(f"Password reset completed for {user.email}")
            messages.success(request, 'Your password has been changed. Please log in.')
            return redirect('accounts:login')
        return render(request, self.template_name, {'form': form})

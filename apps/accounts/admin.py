"""
Accounts models in the Django admin
"""

from django import forms
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm
from django.utils.html import format_html

from apps.core.admin import export_to_excel
from .models import User, UserActivity


class CaseInsensitiveEmailMixin:
    """Admin forms store the email lowercased and unique regardless of case."""

    def clean_email(self):
        email = (self.cleaned_data.get('email') or '').strip().lower()
        duplicates = User.objects.filter(email__iexact=email)
        if self.instance.pk:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise forms.ValidationError('An account with this email already exists.')
        return email


class AdminUserCreationForm(CaseInsensitiveEmailMixin, UserCreationForm):
    class Meta(UserCreationForm.Meta):
        model = User
        fields = ('email', 'name', 'role', 'department')


class AdminUserChangeForm(CaseInsensitiveEmailMixin, UserChangeForm):
    class Meta(UserChangeForm.Meta):
        model = User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = AdminUserChangeForm
    add_form = AdminUserCreationForm
    list_display = ['email', 'name', 'role_badge', 'department', 'is_active', 'date_joined']
    list_filter = ['role', 'department', 'is_active', 'is_staff']
    search_fields = ['email', 'name', 'mobile_number']
    ordering = ['name']
    actions = [export_to_excel]

    fieldsets = (
        ('Identity', {
            'fields': ('email', 'name', 'mobile_number')
        }),
        ('Password', {
            'fields': ('password',),
        }),
        ('Role and department', {
            'fields': ('role', 'department', 'subject_taught')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        ('Dates', {
            'fields': ('date_joined', 'last_login'),
            'classes': ('collapse',)
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'department', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['date_joined', 'last_login']

    def role_badge(self, obj):
        colors = {'admin': '#dc3545', 'faculty': '#198754', 'student': '#0d6efd'}
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            colors.get(obj.role, 'gray'), obj.get_role_display()
        )
    role_badge.short_description = 'Role'


@admin.register(UserActivity)
class UserActivityAdmin(admin.ModelAdmin):
    list_display = ['user', 'activity_type', 'description', 'ip_address', 'created_at']
    list_filter = ['activity_type', 'created_at']
    search_fields = ['user__email', 'user__name', 'description']
    readonly_fields = ['created_at']
    date_hierarchy = 'created_at'
    actions = [export_to_excel]

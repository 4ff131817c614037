"""
Quiz admin
NoteShare - Department Note-Sharing Portal

- AIConfiguration: singleton, no add once it exists, never deleted
- QuizRequestLog: read-only history with Excel export
"""

from django.contrib import admin, messages
from django.utils.html import format_html

from apps.core.admin import export_to_excel
from .models import AIConfiguration, QuizRequestLog


@admin.register(AIConfiguration)
class AIConfigurationAdmin(admin.ModelAdmin):
    list_display = [
        'active_model', 'question_count', 'max_output_tokens',
        'temperature', 'user_rate_limit_per_hour',
        'service_status_badge', 'updated_at',
    ]
    readonly_fields = ['updated_at', 'updated_by']

    fieldsets = (
        ('Model', {
            'fields': ('active_model', 'is_service_enabled', 'maintenance_message'),
        }),
        ('Generation', {
            'fields': ('question_count', 'max_input_chars', 'max_output_tokens', 'temperature'),
            'description': 'Shape of the generated quiz and the size of the prompt.',
        }),
        ('Usage limits', {
            'fields': ('user_rate_limit_per_hour',),
        }),
        ('Audit', {
            'fields': ('updated_at', 'updated_by'),
            'classes': ('collapse',),
        }),
    )

    def service_status_badge(self, obj):
        if obj.is_service_enabled:
            return format_html('<span style="color: #10b981; font-weight: bold;">Enabled</span>')
        return format_html('<span style="color: #ef4444; font-weight: bold;">Disabled</span>')
    service_status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        return not AIConfiguration.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)
        AIConfiguration.invalidate_cache()
        messages.success(request, 'AI configuration saved. Changes apply immediately.')


@admin.register(QuizRequestLog)
class QuizRequestLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'note', 'success', 'question_count', 'latency_ms', 'created_at']
    list_filter = ['success', 'created_at']
    search_fields = ['user__email', 'note__title', 'error_message']
    readonly_fields = [
        'user', 'note', 'success', 'question_count',
        'error_message', 'latency_ms', 'created_at',
    ]
    date_hierarchy = 'created_at'
    actions = [export_to_excel]

    def has_add_permission(self, request):
        return False

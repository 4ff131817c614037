from django.contrib import admin

from .models import ChangeEvent


@admin.register(ChangeEvent)
class ChangeEventAdmin(admin.ModelAdmin):
    list_display = ['id', 'table', 'action', 'object_id', 'created_at']
    list_filter = ['table', 'action']
    readonly_fields = ['table', 'action', 'object_id', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

from django.contrib import admin

from apps.core.admin import export_to_excel
from .models import Department


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ['name', 'member_count', 'note_count', 'created_at']
    search_fields = ['name']
    readonly_fields = ['created_at']
    actions = [export_to_excel]

    def member_count(self, obj):
        return obj.members.count()
    member_count.short_description = 'Users'

    def note_count(self, obj):
        return obj.notes.count()
    note_count.short_description = 'Notes'

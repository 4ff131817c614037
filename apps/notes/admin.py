from django.contrib import admin

from apps.core.admin import export_to_excel
from .models import Note


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ['title', 'faculty', 'department', 'file_path', 'created_at']
    list_filter = ['department', 'created_at']
    search_fields = ['title', 'faculty__name', 'faculty__email']
    raw_id_fields = ['faculty']
    readonly_fields = ['file_path']
    date_hierarchy = 'created_at'
    actions = [export_to_excel]

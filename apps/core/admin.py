"""
Core models in the Django admin, plus the shared Excel export action
"""

from django.contrib import admin
from django.http import HttpResponse
import openpyxl

from .models import AuditLog

EXCLUDED_EXPORT_FIELDS = {'password', 'changes'}


@admin.action(description="Export selected rows to Excel")
def export_to_excel(modeladmin, request, queryset):
    response = HttpResponse(
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    )
    response['Content-Disposition'] = f'attachment; filename="{queryset.model._meta.verbose_name_plural}.xlsx"'

    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    worksheet.title = 'Export'

    fields = [f for f in queryset.model._meta.fields if f.name not in EXCLUDED_EXPORT_FIELDS]
    # verbose_name may be a lazy translation proxy
    worksheet.append([str(f.verbose_name) for f in fields])

    for obj in queryset:
        row = []
        for f in fields:
            value = getattr(obj, f.name)
            row.append(str(value) if value is not None else "")
        worksheet.append(row)

    workbook.save(response)
    return response


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'action', 'model_name', 'object_repr', 'ip_address', 'timestamp']
    list_filter = ['action', 'model_name', 'timestamp']
    search_fields = ['user__name', 'user__email', 'model_name', 'object_repr']
    readonly_fields = ['user', 'action', 'model_name', 'object_id', 'object_repr', 'changes', 'ip_address', 'user_agent', 'timestamp']
    date_hierarchy = 'timestamp'
    actions = [export_to_excel]

    # Audit rows are written by the application only
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

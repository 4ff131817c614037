"""
Department Views
NoteShare - Department Note-Sharing Portal

Admin-only department management:
- Full page with the create form and the department table
- HTMX fragment with the table rows (re-fetched on "departments-changed")
- Create / rename / delete (POST, then redirect back to the list)
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View

from apps.accounts.views.mixins import AdminRequiredMixin
from apps.core.models import AuditLog
from .forms import DepartmentForm
from .models import Department
from .services import DepartmentError, DepartmentService

logger = logging.getLogger('departments')


def _reject_form(request, form):
    for errors in form.errors.values():
        for error in errors:
            messages.error(request, error)
    return redirect('departments:list')


class DepartmentListView(LoginRequiredMixin, AdminRequiredMixin, View):
    template_name = 'departments/list.html'

    def get(self, request):
        return render(request, self.template_name, {
            'form': DepartmentForm(),
            'departments': DepartmentService.list_departments(),
            'active_page': 'departments',
        })


class DepartmentRowsView(LoginRequiredMixin, AdminRequiredMixin, View):
    """HTMX: the department table body."""

    def get(self, request):
        return render(request, 'departments/partials/rows.html', {
            'departments': DepartmentService.list_departments(),
        })


class DepartmentCreateView(LoginRequiredMixin, AdminRequiredMixin, View):

    def post(self, request):
        form = DepartmentForm(request.POST)
        if not form.is_valid():
            return _reject_form(request, form)
        try:
            department = DepartmentService.create(form.cleaned_data.get('name', ''))
        except DepartmentError as e:
            messages.error(request, str(e))
            return redirect('departments:list')

        AuditLog.log(
            user=request.user,
            action='create',
            model_name='Department',
            object_id=department.pk,
            object_repr=department.name,
            request=request,
        )
        messages.success(request, f'Department "{department.name}" added.')
        return redirect('departments:list')


class DepartmentUpdateView(LoginRequiredMixin, AdminRequiredMixin, View):

    def post(self, request, pk):
        department = get_object_or_404(Department, pk=pk)
        old_name = department.name
        form = DepartmentForm(request.POST)
        if not form.is_valid():
            return _reject_form(request, form)
        try:
            DepartmentService.rename(department, form.cleaned_data.get('name', ''))
        except DepartmentError as e:
            messages.error(request, str(e))
            return redirect('departments:list')

        AuditLog.log(
            user=request.user,
            action='update',
            model_name='Department',
            object_id=department.pk,
            object_repr=department.name,
            changes={'name': [old_name, department.name]},
            request=request,
        )
        messages.success(request, 'Department updated.')
        return redirect('departments:list')


class DepartmentDeleteView(LoginRequiredMixin, AdminRequiredMixin, View):

    def post(self, request, pk):
        department = get_object_or_404(Department, pk=pk)
        department_id, name = department.pk, department.name
        try:
            DepartmentService.delete(department)
        except DepartmentError as e:
            logger.warning(f"Department delete refused for {name}: {e}")
            messages.error(request, str(e))
            return redirect('departments:list')

        AuditLog.log(
            user=request.user,
            action='delete',
            model_name='Department',
            object_id=department_id,
            object_repr=name,
            request=request,
        )
        messages.success(request, f'Department "{name}" deleted.')
        return redirect('departments:list')

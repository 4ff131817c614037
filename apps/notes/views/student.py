"""
Student Views
NoteShare - Department Note-Sharing Portal

The dashboard loads the notes of the student's department once and
narrows them with the filter bar. The list is also served as an HTMX
fragment so it can re-fetch itself when notes or departments change.
"""

from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import render
from django.views import View

from apps.accounts.views.mixins import StudentRequiredMixin
from ..filters import filter_notes, unique_faculties
from ..forms import NoteFilterForm
from ..services import NoteService


class StudentNotesContextMixin:

    def get_notes_context(self, request):
        user = request.user
        if not user.department_id:
            return {
                'profile_incomplete': True,
                'profile_message': NoteService.PROFILE_INCOMPLETE_BROWSE,
                'notes': [],
                'filter_form': NoteFilterForm(),
            }

        all_notes = list(NoteService.list_for_department(user.department_id))
        filter_form = NoteFilterForm(request.GET or None, faculties=unique_faculties(all_notes))
        criteria = filter_form.to_criteria()
        notes = filter_notes(all_notes, criteria)

        return {
            'profile_incomplete': False,
            'department': user.department,
            'notes': notes,
            'total_count': len(all_notes),
            'filters_active': criteria.is_active,
            'filter_form': filter_form,
        }


class StudentDashboardView(LoginRequiredMixin, StudentRequiredMixin, StudentNotesContextMixin, View):
    template_name = 'notes/student_dashboard.html'

    def get(self, request):
        context = self.get_notes_context(request)
        context['active_page'] = 'dashboard'
        return render(request, self.template_name, context)


class StudentNoteListView(LoginRequiredMixin, StudentRequiredMixin, StudentNotesContextMixin, View):
    """HTMX: the filtered note grid, with the faculty select swapped out of band."""

    def get(self, request):
        context = self.get_notes_context(request)
        context['refresh_faculty_filter'] = True
        return render(request, 'notes/partials/student_notes.html', context)

"""
Faculty Views
NoteShare - Department Note-Sharing Portal

- Dashboard with the faculty member's own notes
- Upload form (requires a department on the profile)
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import redirect, render
from django.views import View

from apps.accounts.models import UserActivity
from apps.accounts.views.mixins import FacultyRequiredMixin
from ..forms import NoteUploadForm
from ..services import NoteService, NoteUploadError

logger = logging.getLogger('notes')


class FacultyDashboardView(LoginRequiredMixin, FacultyRequiredMixin, View):
    template_name = 'notes/faculty_dashboard.html'

    def get(self, request):
        return render(request, self.template_name, {
            'notes': NoteService.list_for_faculty(request.user),
            'profile_incomplete': not request.user.department_id,
            'profile_message': NoteService.PROFILE_INCOMPLETE_UPLOAD,
            'upload_form': NoteUploadForm(),
            'active_page': 'dashboard',
        })


class FacultyNoteListView(LoginRequiredMixin, FacultyRequiredMixin, View):
    """HTMX: the faculty member's note table."""

    def get(self, request):
        return render(request, 'notes/partials/faculty_notes.html', {
            'notes': NoteService.list_for_faculty(request.user),
        })


class NoteUploadView(LoginRequiredMixin, FacultyRequiredMixin, View):
    template_name = 'notes/upload.html'

    def get(self, request):
        if not request.user.department_id:
            messages.warning(request, NoteService.PROFILE_INCOMPLETE_UPLOAD)
        return render(request, self.template_name, {
            'form': NoteUploadForm(),
            'active_page': 'upload',
        })

    def post(self, request):
        form = NoteUploadForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                note = NoteService.upload(
                    request.user,
                    form.cleaned_data['title'],
                    form.cleaned_data['file'],
                )
            except NoteUploadError as e:
                messages.error(request, str(e))
            else:
                UserActivity.record(request, 'upload', f'Uploaded note: {note.title}', note_id=note.pk)
                messages.success(request, 'Note uploaded successfully!')
                return redirect('notes:faculty_dashboard')

        return render(request, self.template_name, {
            'form': form,
            'active_page': 'upload',
        })

"""
Admin note listing
NoteShare - Department Note-Sharing Portal
"""

from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import render
from django.views import View

from apps.accounts.views.mixins import AdminRequiredMixin
from ..services import NoteService


class AdminNoteRowsView(LoginRequiredMixin, AdminRequiredMixin, View):
    """HTMX: every note with uploader and department, newest first."""

    def get(self, request):
        return render(request, 'notes/partials/admin_note_rows.html', {
            'notes': NoteService.list_all(),
        })

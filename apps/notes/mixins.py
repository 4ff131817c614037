"""
Note access mixin
NoteShare - Department Note-Sharing Portal

Guards note lookups against IDOR: a note id from the URL is only returned
when NoteService.can_access() allows the current user to see it.
"""

from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.shortcuts import get_object_or_404

from .models import Note
from .services import NoteService


class SecureNoteMixin(LoginRequiredMixin):

    def get_secure_note(self, pk):
        """
        Fetch a note the current user may read.

        Raises:
            Http404: no such note.
            PermissionDenied: the note belongs to another department/uploader.
        """
        note = get_object_or_404(Note.objects.select_related('faculty', 'department'), pk=pk)
        if not NoteService.can_access(self.request.user, note):
            raise PermissionDenied('You do not have access to this note.')
        return note

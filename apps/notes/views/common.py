"""
Common Views
NoteShare - Department Note-Sharing Portal

Views shared by every role:
- Download (attachment named after the stored file)
- Preview (Markdown/text rendered inline, PDF served inline)
- Delete (admin or the uploading faculty member, otherwise 403)
"""

import logging

import markdown
from markdown.extensions import Extension
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.http import FileResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View

from apps.accounts.models import UserActivity
from apps.core.models import AuditLog
from ..mixins import SecureNoteMixin
from ..models import Note
from ..services import NoteService, NoteStorageError
from ..storage import NoteStorage

logger = logging.getLogger('notes')

MARKDOWN_EXTENSIONS = ('.md', '.markdown')
PLAIN_TEXT_EXTENSIONS = ('.txt', '.csv')


class _EscapeRawHtml(Extension):
    """Drop raw HTML from uploaded Markdown before rendering it."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister('html_block')
        md.inlinePatterns.deregister('html')


def render_markdown(text):
    return markdown.markdown(
        text,
        extensions=['tables', 'fenced_code', 'nl2br', _EscapeRawHtml()]
    )


def dashboard_for(user):
    if user.is_admin():
        return 'core:admin_dashboard'
    if user.is_faculty():
        return 'notes:faculty_dashboard'
    return 'notes:student_dashboard'


class NoteDownloadView(SecureNoteMixin, View):

    def get(self, request, pk):
        try:
            note = self.get_secure_note(pk)
            fh = NoteService.open_file(note)
        except PermissionDenied as e:
            logger.warning(f"Blocked download of note {pk} by {request.user.email}: {e}")
            messages.error(request, str(e))
            return redirect(dashboard_for(request.user))
        except NoteStorageError as e:
            messages.error(request, str(e))
            return redirect(dashboard_for(request.user))

        UserActivity.record(request, 'download', f'Downloaded note: {note.title}', note_id=note.pk)

        return FileResponse(
            fh,
            as_attachment=True,
            filename=note.file_name,
            content_type=NoteStorage.content_type(note.file_path),
        )


class NotePreviewView(SecureNoteMixin, View):
    """
    Inline preview.

    Markdown is converted to HTML (raw HTML stripped), plain text is shown
    preformatted, PDFs are handed to the browser inline, and anything else
    falls back to a download.
    """
    template_name = 'notes/preview.html'

    def get(self, request, pk):
        try:
            note = self.get_secure_note(pk)
        except PermissionDenied as e:
            logger.warning(f"Blocked preview of note {pk} by {request.user.email}: {e}")
            messages.error(request, str(e))
            return redirect(dashboard_for(request.user))

        ext = note.extension
        if ext not in MARKDOWN_EXTENSIONS + PLAIN_TEXT_EXTENSIONS + ('.pdf',):
            return redirect('notes:download', pk=note.pk)

        try:
            fh = NoteService.open_file(note)
        except NoteStorageError as e:
            messages.error(request, str(e))
            return redirect(dashboard_for(request.user))

        UserActivity.record(request, 'view', f'Previewed note: {note.title}', note_id=note.pk)

        if ext == '.pdf':
            return FileResponse(fh, filename=note.file_name, content_type='application/pdf')

        with fh:
            text = fh.read().decode('utf-8', errors='replace')

        context = {'note': note, 'back_url': dashboard_for(request.user)}
        if ext in MARKDOWN_EXTENSIONS:
            context['html_content'] = render_markdown(text)
        else:
            context['text_content'] = text
        return render(request, self.template_name, context)


class NoteDeleteView(LoginRequiredMixin, View):

    def post(self, request, pk):
        note = get_object_or_404(Note, pk=pk)
        note_id, title = note.pk, note.title
        # PermissionDenied from the service becomes a 403
        NoteService.delete(request.user, note)

        if request.user.is_admin():
            AuditLog.log(
                user=request.user,
                action='delete',
                model_name='Note',
                object_id=note_id,
                object_repr=title,
                request=request,
            )
        messages.success(request, 'Note deleted successfully.')
        return redirect(dashboard_for(request.user))

"""
Views Package
NoteShare - Department Note-Sharing Portal

- student.py: department notes with the filter bar
- faculty.py: own notes and upload
- admin.py: every note (admin dashboard tab)
- common.py: download, preview and delete
"""

from .student import StudentDashboardView, StudentNoteListView
from .faculty import FacultyDashboardView, FacultyNoteListView, NoteUploadView
from .admin import AdminNoteRowsView
from .common import NoteDownloadView, NotePreviewView, NoteDeleteView

__all__ = [
    'StudentDashboardView',
    'StudentNoteListView',
    'FacultyDashboardView',
    'FacultyNoteListView',
    'NoteUploadView',
    'AdminNoteRowsView',
    'NoteDownloadView',
    'NotePreviewView',
    'NoteDeleteView',
]

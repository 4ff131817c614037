"""
Note service layer
NoteShare - Department Note-Sharing Portal

=== NoteService ===
- Listing: all notes (admin), by department (students), by uploader (faculty)
- Upload: department check, file validation, storage write, row insert,
  and removal of the stored file when the insert fails
- Delete: admin or owning faculty; a storage failure is logged and the
  row is deleted anyway
- Access rules shared by download, preview and quiz generation
- Portal statistics for the admin dashboard
"""

import logging
import os

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.departments.models import Department
from .models import Note
from .storage import NoteStorage

logger = logging.getLogger('notes')


class NoteUploadError(Exception):
    """Raised when an upload is rejected before anything is stored."""
    pass


class NoteStorageError(Exception):
    """Raised when a note's stored file cannot be read."""
    pass


class NoteService:

    PROFILE_INCOMPLETE_UPLOAD = 'User profile is incomplete. Please set your department before uploading.'
    PROFILE_INCOMPLETE_BROWSE = 'Please complete your profile by selecting a department to view notes.'

    # ============================================================
    # Listing
    # ============================================================

    @staticmethod
    def _with_names(queryset):
        return queryset.select_related('faculty', 'department').order_by('-created_at')

    @classmethod
    def list_all(cls):
        return cls._with_names(Note.objects.all())

    @classmethod
    def list_for_department(cls, department_id):
        return cls._with_names(Note.objects.filter(department_id=department_id))

    @classmethod
    def list_for_faculty(cls, faculty):
        return cls._with_names(Note.objects.filter(faculty=faculty))

    # ============================================================
    # Access rules
    # ============================================================

    @staticmethod
    def can_manage(user, note) -> bool:
        """Admins manage every note; faculty manage their own."""
        return user.is_admin() or note.faculty_id == user.pk

    @classmethod
    def can_access(cls, user, note) -> bool:
        """Download/preview rule: managers, plus students of the note's department."""
        if cls.can_manage(user, note):
            return True
        return (
            user.is_student()
            and user.department_id is not None
            and user.department_id == note.department_id
        )

    # ============================================================
    # Upload
    # ============================================================

    @staticmethod
    def build_storage_path(faculty_id, filename, now=None) -> str:
        """'<faculty_id>/<unix_millis>.<ext>' for an uploaded file name."""
        now = now or timezone.now()
        millis = int(now.timestamp() * 1000)
        ext = os.path.splitext(filename)[1].lower()
        return f'{faculty_id}/{millis}{ext}'

    @staticmethod
    def validate_file(uploaded_file):
        ext = os.path.splitext(uploaded_file.name)[1].lower()
        allowed = getattr(settings, 'ALLOWED_NOTE_EXTENSIONS', [])
        if allowed and ext not in allowed:
            raise NoteUploadError(
                f'File type "{ext or "none"}" is not allowed. Allowed types: {", ".join(allowed)}'
            )
        max_size = getattr(settings, 'MAX_UPLOAD_SIZE', None)
        if max_size and uploaded_file.size > max_size:
            raise NoteUploadError(
                f'File is too large. Maximum size is {max_size // (1024 * 1024)} MB.'
            )

    @classmethod
    def upload(cls, faculty, title, uploaded_file) -> Note:
        """
        Store a faculty member's file and create the note row.

        Raises:
            PermissionDenied: the uploader is not faculty.
            NoteUploadError: incomplete profile, empty title or bad file.
        """
        if not faculty.is_faculty():
            raise PermissionDenied('Only faculty members can upload notes.')
        if not faculty.department_id:
            raise NoteUploadError(cls.PROFILE_INCOMPLETE_UPLOAD)

        title = (title or '').strip()
        if not title:
            raise NoteUploadError('Please provide a title and select a file.')
        if uploaded_file is None:
            raise NoteUploadError('Please provide a title and select a file.')
        cls.validate_file(uploaded_file)

        storage = NoteStorage()
        stored_path = storage.save(cls.build_storage_path(faculty.pk, uploaded_file.name), uploaded_file)

        try:
            with transaction.atomic():
                note = Note.objects.create(
                    title=title,
                    file_path=stored_path,
                    faculty=faculty,
                    department_id=faculty.department_id,
                )
        except Exception:
            logger.error(f"Note insert failed for {stored_path}; removing stored file")
            storage.delete(stored_path)
            raise

        logger.info(f"Note uploaded: '{note.title}' by {faculty.email} -> {stored_path}")
        return note

    # ============================================================
    # Delete
    # ============================================================

    @classmethod
    def delete(cls, user, note):
        """
        Delete a note and its stored file.

        Raises:
            PermissionDenied: user is neither an admin nor the uploader.
        """
        if not cls.can_manage(user, note):
            logger.warning(f"User {user.email} tried to delete note {note.pk} without permission")
            raise PermissionDenied('You do not have permission to delete this note.')

        try:
            NoteStorage().delete(note.file_path)
        except OSError as e:
            logger.error(f"Failed to remove stored file {note.file_path} for note {note.pk}: {e}")

        note_id = note.pk
        note.delete()
        logger.info(f"Note {note_id} deleted by {user.email}")

    @classmethod
    def purge_files_for_faculty(cls, faculty) -> int:
        """Remove every stored file of a faculty member; rows are left alone."""
        storage = NoteStorage()
        removed = 0
        for path in Note.objects.filter(faculty=faculty).values_list('file_path', flat=True):
            try:
                storage.delete(path)
                removed += 1
            except OSError as e:
                logger.error(f"Failed to remove stored file {path}: {e}")
        return removed

    # ============================================================
    # File access
    # ============================================================

    @staticmethod
    def open_file(note):
        storage = NoteStorage()
        if not storage.exists(note.file_path):
            logger.error(f"Stored file missing for note {note.pk}: {note.file_path}")
            raise NoteStorageError('The file for this note could not be found.')
        return storage.open(note.file_path)

    @classmethod
    def read_file(cls, note) -> bytes:
        with cls.open_file(note) as fh:
            return fh.read()

    # ============================================================
    # Statistics
    # ============================================================

    @staticmethod
    def stats():
        return {
            'users': User.objects.count(),
            'notes': Note.objects.count(),
            'departments': Department.objects.count(),
        }

"""
Note model
NoteShare - Department Note-Sharing Portal
"""

from pathlib import PurePosixPath

from django.conf import settings
from django.db import models
from django.utils import timezone


class Note(models.Model):
    """
    A file uploaded by a faculty member into their department.

    file_path is relative to the notes storage root and has the form
    "<faculty_id>/<unix_millis>.<ext>".
    """
    title = models.CharField(max_length=255, verbose_name='Title')
    file_path = models.CharField(max_length=500, verbose_name='File path')
    faculty = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notes',
        verbose_name='Uploaded by'
    )
    department = models.ForeignKey(
        'departments.Department',
        on_delete=models.PROTECT,
        related_name='notes',
        verbose_name='Department'
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name='Uploaded at')

    class Meta:
        db_table = 'notes'
        verbose_name = 'Note'
        verbose_name_plural = 'Notes'
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def file_name(self):
        """Last segment of the storage path, used as the download name."""
        return PurePosixPath(self.file_path).name

    @property
    def extension(self):
        return PurePosixPath(self.file_path).suffix.lower()

    @property
    def faculty_name(self):
        return self.faculty.display_name

    @property
    def department_name(self):
        return self.department.name

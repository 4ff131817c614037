"""
Note file storage
NoteShare - Department Note-Sharing Portal

Thin wrapper over FileSystemStorage rooted at MEDIA_ROOT/<NOTES_STORAGE_DIR>.
The root is read from settings on construction, so create one per
operation rather than holding a module-level instance.
"""

import logging
import mimetypes
from pathlib import Path

from django.conf import settings
from django.core.files.storage import FileSystemStorage

logger = logging.getLogger('notes')


class NoteStorage:

    def __init__(self, location=None):
        if location is None:
            location = Path(settings.MEDIA_ROOT) / getattr(settings, 'NOTES_STORAGE_DIR', 'notes')
        self._storage = FileSystemStorage(location=str(location))

    @property
    def location(self):
        return self._storage.location

    def save(self, path, content) -> str:
        """Store content under path and return the name actually used."""
        name = self._storage.save(path, content)
        logger.info(f"NoteStorage: saved {name}")
        return name

    def exists(self, path) -> bool:
        return bool(path) and self._storage.exists(path)

    def open(self, path):
        return self._storage.open(path, 'rb')

    def delete(self, path):
        """Remove a stored file. Missing files are ignored; OS errors propagate."""
        self._storage.delete(path)
        logger.info(f"NoteStorage: removed {path}")

    @staticmethod
    def content_type(path) -> str:
        content_type, _ = mimetypes.guess_type(path)
        return content_type or 'application/octet-stream'

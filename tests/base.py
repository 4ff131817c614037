"""
Shared test helpers
NoteShare - Department Note-Sharing Portal
"""

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.departments.models import Department
from apps.notes.services import NoteService

User = get_user_model()

DEFAULT_PASSWORD = 'TestPass123!'


class BaseTestMixin:
    """Base mixin with user, department and note factories."""

    @classmethod
    def create_department(cls, name='Computer Science'):
        department, _ = Department.objects.get_or_create(name=name)
        return department

    @classmethod
    def create_user(cls, email='student@example.com', password=DEFAULT_PASSWORD,
                    role='student', name='Test Student', **kwargs):
        return User.objects.create_user(
            email=email,
            password=password,
            name=name,
            role=role,
            **kwargs
        )

    @classmethod
    def create_faculty(cls, email='faculty@example.com', **kwargs):
        return cls.create_user(
            email=email,
            role='faculty',
            name=kwargs.pop('name', 'Test Faculty'),
            **kwargs
        )

    @classmethod
    def create_admin_user(cls, email='admin@example.com', **kwargs):
        return cls.create_user(
            email=email,
            role='admin',
            name=kwargs.pop('name', 'Test Admin'),
            **kwargs
        )

    @classmethod
    def make_file(cls, name='lecture.txt', content=b'Linked lists store nodes.', content_type='text/plain'):
        return SimpleUploadedFile(name, content, content_type=content_type)

    @classmethod
    def upload_note(cls, faculty, title='Week 1', file=None):
        """Upload through the service so the stored file exists (needs MEDIA_ROOT override)."""
        return NoteService.upload(faculty, title, file or cls.make_file())

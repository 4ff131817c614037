"""
Department service layer
NoteShare - Department Note-Sharing Portal

DepartmentService is the single place where departments are created,
renamed and deleted, so the name rules hold for every caller (views,
admin, shell).
"""

import logging

from django.db import transaction

from .models import Department

logger = logging.getLogger('departments')


class DepartmentError(Exception):
    """Raised when a department operation is rejected."""
    pass


class DepartmentService:
    """Create, rename and delete departments."""

    EMPTY_NAME_MESSAGE = 'Department name cannot be empty.'
    MAX_NAME_LENGTH = Department._meta.get_field('name').max_length

    @classmethod
    def list_departments(cls):
        return Department.objects.order_by('name')

    @staticmethod
    def normalize_name(name) -> str:
        return (name or '').strip()

    @classmethod
    def clean_name(cls, name) -> str:
        name = cls.normalize_name(name)
        if not name:
            raise DepartmentError(cls.EMPTY_NAME_MESSAGE)
        if len(name) > cls.MAX_NAME_LENGTH:
            raise DepartmentError(f'Department name cannot be longer than {cls.MAX_NAME_LENGTH} characters.')
        return name

    @classmethod
    def _check_available(cls, name, exclude_pk=None):
        clash = Department.objects.filter(name__iexact=name)
        if exclude_pk is not None:
            clash = clash.exclude(pk=exclude_pk)
        if clash.exists():
            raise DepartmentError(f'Department "{name}" already exists.')

    @classmethod
    @transaction.atomic
    def create(cls, name) -> Department:
        """
        Create a department.

        Raises:
            DepartmentError: empty or over-long name, or a case-insensitive duplicate.
        """
        name = cls.clean_name(name)
        cls._check_available(name)
        department = Department.objects.create(name=name)
        logger.info(f"Department created: {department.name} (id={department.pk})")
        return department

    @classmethod
    @transaction.atomic
    def rename(cls, department, name) -> Department:
        name = cls.clean_name(name)
        cls._check_available(name, exclude_pk=department.pk)
        old_name = department.name
        department.name = name
        department.save(update_fields=['name'])
        logger.info(f"Department renamed: {old_name} -> {name} (id={department.pk})")
        return department

    @classmethod
    @transaction.atomic
    def delete(cls, department):
        """
        Delete a department.

        Members keep their accounts with the department cleared; a
        department that still owns notes is refused.
        """
        note_count = department.notes.count()
        if note_count:
            raise DepartmentError(
                f'Department "{department.name}" still has {note_count} note(s). '
                f'Delete them before removing the department.'
            )
        name = department.name
        department.delete()
        logger.info(f"Department deleted: {name}")

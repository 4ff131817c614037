"""
User management service
NoteShare - Department Note-Sharing Portal
"""

import logging

from django.core.exceptions import PermissionDenied
from django.db import transaction

from apps.notes.services import NoteService
from .models import User

logger = logging.getLogger('accounts')


class UserDeletionError(Exception):
    """Raised when an account may not be deleted."""
    pass


class UserService:

    SELF_DELETE_MESSAGE = 'Admins cannot delete their own account for safety reasons.'

    @classmethod
    def list_users(cls):
        """All users by name, with departments joined for display."""
        return User.objects.select_related('department').order_by('name', 'email')

    @classmethod
    @transaction.atomic
    def delete_user(cls, actor, user):
        """
        Delete an account on behalf of an admin.

        The user's stored note files are removed first; their note rows go
        with the account through the foreign key cascade.

        Raises:
            PermissionDenied: actor is not an admin.
            UserDeletionError: actor tried to delete their own account.
        """
        if not actor.is_admin():
            raise PermissionDenied('Only admins can delete users.')
        if actor.pk == user.pk:
            raise UserDeletionError(cls.SELF_DELETE_MESSAGE)

        removed = NoteService.purge_files_for_faculty(user)
        email = user.email
        user.delete()
        logger.info(f"User {email} deleted by {actor.email} ({removed} stored file(s) removed)")

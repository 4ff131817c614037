"""
Signals that publish change events
NoteShare - Department Note-Sharing Portal

=== Watched tables ===
1. notes.Note              -> "notes"
2. departments.Department  -> "departments"
3. accounts.User           -> "profiles"
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import ChangeEvent
from .services import ChangeFeed


def _publish_save(table, instance, created):
    action = ChangeEvent.Action.INSERT if created else ChangeEvent.Action.UPDATE
    ChangeFeed.publish(table, action, instance.pk)


@receiver(post_save, sender='notes.Note')
def note_saved(sender, instance, created, **kwargs):
    _publish_save(ChangeEvent.Table.NOTES, instance, created)


@receiver(post_delete, sender='notes.Note')
def note_deleted(sender, instance, **kwargs):
    ChangeFeed.publish(ChangeEvent.Table.NOTES, ChangeEvent.Action.DELETE, instance.pk)


@receiver(post_save, sender='departments.Department')
def department_saved(sender, instance, created, **kwargs):
    _publish_save(ChangeEvent.Table.DEPARTMENTS, instance, created)


@receiver(post_delete, sender='departments.Department')
def department_deleted(sender, instance, **kwargs):
    ChangeFeed.publish(ChangeEvent.Table.DEPARTMENTS, ChangeEvent.Action.DELETE, instance.pk)


@receiver(post_save, sender='accounts.User')
def profile_saved(sender, instance, created, update_fields=None, **kwargs):
    # last_login is touched on every sign-in and changes nothing on screen
    if update_fields is not None and set(update_fields) == {'last_login'}:
        return
    _publish_save(ChangeEvent.Table.PROFILES, instance, created)


@receiver(post_delete, sender='accounts.User')
def profile_deleted(sender, instance, **kwargs):
    ChangeFeed.publish(ChangeEvent.Table.PROFILES, ChangeEvent.Action.DELETE, instance.pk)

"""
Change event log
NoteShare - Department Note-Sharing Portal
"""

from django.db import models


class ChangeEvent(models.Model):
    """
    One row per insert/update/delete on a watched table.

    The auto-increment id doubles as the stream cursor: clients ask for
    everything after the last id they saw.
    """

    class Table(models.TextChoices):
        NOTES = 'notes', 'Notes'
        DEPARTMENTS = 'departments', 'Departments'
        PROFILES = 'profiles', 'Profiles'

    class Action(models.TextChoices):
        INSERT = 'INSERT', 'Insert'
        UPDATE = 'UPDATE', 'Update'
        DELETE = 'DELETE', 'Delete'

    table = models.CharField(max_length=20, choices=Table.choices, db_index=True, verbose_name='Table')
    action = models.CharField(max_length=10, choices=Action.choices, verbose_name='Action')
    object_id = models.PositiveBigIntegerField(null=True, blank=True, verbose_name='Object ID')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')

    class Meta:
        db_table = 'change_events'
        verbose_name = 'Change event'
        verbose_name_plural = 'Change events'
        ordering = ['id']

    def __str__(self):
        return f'#{self.pk} {self.action} {self.table}:{self.object_id}'

    def to_dict(self):
        return {
            'id': self.pk,
            'table': self.table,
            'action': self.action,
            'object_id': self.object_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

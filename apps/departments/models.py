"""
Department model
NoteShare - Department Note-Sharing Portal
"""

from django.db import models
from django.db.models.functions import Lower


class Department(models.Model):
    """
    An academic department.

    Students see the notes of their own department; faculty upload notes
    into theirs. Names are unique regardless of case.
    """
    name = models.CharField(max_length=150, unique=True, verbose_name='Name')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Created at')

    class Meta:
        db_table = 'departments'
        verbose_name = 'Department'
        verbose_name_plural = 'Departments'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(Lower('name'), name='department_name_ci_unique'),
        ]

    def __str__(self):
        return self.name

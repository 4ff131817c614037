"""
Core models
NoteShare - Department Note-Sharing Portal
"""

from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """
    Append-only record of administrative changes.

    Written through AuditLog.log() from views that mutate users,
    departments or notes on someone else's behalf.
    """

    ACTION_CHOICES = [
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='audit_logs',
        verbose_name='User'
    )
    action = models.CharField(max_length=20, choices=ACTION_CHOICES, verbose_name='Action')
    model_name = models.CharField(max_length=100, verbose_name='Model')
    object_id = models.PositiveBigIntegerField(null=True, blank=True, verbose_name='Object ID')
    object_repr = models.CharField(max_length=255, blank=True, verbose_name='Object')
    changes = models.JSONField(default=dict, blank=True, verbose_name='Changes')
    ip_address = models.GenericIPAddressField(null=True, blank=True, verbose_name='IP address')
    user_agent = models.TextField(blank=True, verbose_name='User agent')
    timestamp = models.DateTimeField(auto_now_add=True, verbose_name='Timestamp')

    class Meta:
        db_table = 'audit_logs'
        verbose_name = 'Audit log'
        verbose_name_plural = 'Audit logs'
        ordering = ['-timestamp']

    def __str__(self):
        return f'{self.get_action_display()} {self.model_name} #{self.object_id}'

    @classmethod
    def log(cls, user, action, model_name, object_id=None, object_repr='', changes=None, request=None):
        ip_address = None
        user_agent = ''
        if request is not None:
            from apps.accounts.models import get_client_ip
            ip_address = get_client_ip(request)
            user_agent = request.META.get('HTTP_USER_AGENT', '')

        return cls.objects.create(
            user=user,
            action=action,
            model_name=model_name,
            object_id=object_id,
            object_repr=str(object_repr)[:255],
            changes=changes or {},
            ip_address=ip_address,
            user_agent=user_agent,
        )

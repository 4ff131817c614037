"""
Quiz generation models
NoteShare - Department Note-Sharing Portal

- AIConfiguration: singleton with the admin-editable generation settings
- QuizRequestLog: one row per generation attempt (rate limiting + review)
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.core.cache import cache
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

logger = logging.getLogger('quizzes')

CONFIG_CACHE_KEY = 'quizzes_ai_configuration'


def default_model_name():
    return getattr(settings, 'AI_MODEL_NAME', 'gemini-2.5-flash')


class AIConfiguration(models.Model):
    """
    Singleton: settings for the quiz generator.

    Admins change the model, the quiz shape and the service toggle from
    the Django admin without a deploy.

    Usage: AIConfiguration.get_config()
    """

    active_model = models.CharField(
        max_length=100,
        default=default_model_name,
        verbose_name='Model',
        help_text='Model name sent to the OpenAI-compatible endpoint'
    )
    temperature = models.FloatField(
        default=0.3,
        validators=[MinValueValidator(0.0), MaxValueValidator(2.0)],
        verbose_name='Temperature'
    )
    max_output_tokens = models.PositiveIntegerField(
        default=4000,
        validators=[MinValueValidator(100), MaxValueValidator(65536)],
        verbose_name='Max output tokens'
    )
    max_input_chars = models.PositiveIntegerField(
        default=30000,
        validators=[MinValueValidator(1000), MaxValueValidator(200000)],
        verbose_name='Max input characters',
        help_text='Extracted text is truncated to this length before prompting'
    )
    question_count = models.PositiveSmallIntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(20)],
        verbose_name='Questions per quiz'
    )
    user_rate_limit_per_hour = models.PositiveIntegerField(
        default=20,
        validators=[MinValueValidator(1), MaxValueValidator(1000)],
        verbose_name='Quizzes per user per hour'
    )
    is_service_enabled = models.BooleanField(default=True, verbose_name='Service enabled')
    maintenance_message = models.CharField(
        max_length=500,
        blank=True,
        default='Quiz generation is temporarily unavailable.',
        verbose_name='Maintenance message'
    )

    updated_at = models.DateTimeField(auto_now=True, verbose_name='Updated at')
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='ai_config_updates',
        verbose_name='Updated by'
    )

    class Meta:
        db_table = 'ai_configuration'
        verbose_name = 'AI configuration'
        verbose_name_plural = 'AI configuration'

    def __str__(self):
        status = 'enabled' if self.is_service_enabled else 'disabled'
        return f'AI configuration ({self.active_model}, {status})'

    def save(self, *args, **kwargs):
        """Singleton: always row 1."""
        self.pk = 1
        super().save(*args, **kwargs)
        cache.delete(CONFIG_CACHE_KEY)

    def delete(self, *args, **kwargs):
        """The singleton is never deleted."""
        pass

    @classmethod
    def get_config(cls):
        config = cache.get(CONFIG_CACHE_KEY)
        if config is None:
            config, _ = cls.objects.get_or_create(pk=1)
            cache.set(CONFIG_CACHE_KEY, config, timeout=300)
        return config

    @classmethod
    def invalidate_cache(cls):
        cache.delete(CONFIG_CACHE_KEY)


class QuizRequestLog(models.Model):
    """One quiz generation attempt."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='quiz_requests',
        verbose_name='User'
    )
    note = models.ForeignKey(
        'notes.Note',
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='quiz_requests',
        verbose_name='Note'
    )
    success = models.BooleanField(default=False, verbose_name='Succeeded')
    question_count = models.PositiveSmallIntegerField(default=0, verbose_name='Questions')
    error_message = models.TextField(blank=True, verbose_name='Error')
    latency_ms = models.PositiveIntegerField(default=0, verbose_name='Latency (ms)')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Requested at')

    class Meta:
        db_table = 'quiz_request_logs'
        verbose_name = 'Quiz request'
        verbose_name_plural = 'Quiz requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='quiz_req_user_created_idx'),
        ]

    def __str__(self):
        status = 'ok' if self.success else 'failed'
        return f'{self.user.email} - note {self.note_id} ({status})'

    @classmethod
    def requests_in_last_hour(cls, user):
        one_hour_ago = timezone.now() - timedelta(hours=1)
        return cls.objects.filter(user=user, created_at__gte=one_hour_ago).count()

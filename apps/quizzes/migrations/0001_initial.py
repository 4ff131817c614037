import apps.quizzes.models
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('notes', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AIConfiguration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('active_model', models.CharField(default=apps.quizzes.models.default_model_name, help_text='Model name sent to the OpenAI-compatible endpoint', max_length=100, verbose_name='Model')),
                ('temperature', models.FloatField(default=0.3, validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(2.0)], verbose_name='Temperature')),
                ('max_output_tokens', models.PositiveIntegerField(default=4000, validators=[django.core.validators.MinValueValidator(100), django.core.validators.MaxValueValidator(65536)], verbose_name='Max output tokens')),
                ('max_input_chars', models.PositiveIntegerField(default=30000, help_text='Extracted text is truncated to this length before prompting', validators=[django.core.validators.MinValueValidator(1000), django.core.validators.MaxValueValidator(200000)], verbose_name='Max input characters')),
                ('question_count', models.PositiveSmallIntegerField(default=5, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(20)], verbose_name='Questions per quiz')),
                ('user_rate_limit_per_hour', models.PositiveIntegerField(default=20, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(1000)], verbose_name='Quizzes per user per hour')),
                ('is_service_enabled', models.BooleanField(default=True, verbose_name='Service enabled')),
                ('maintenance_message', models.CharField(blank=True, default='Quiz generation is temporarily unavailable.', max_length=500, verbose_name='Maintenance message')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ai_config_updates', to=settings.AUTH_USER_MODEL, verbose_name='Updated by')),
            ],
            options={
                'verbose_name': 'AI configuration',
                'verbose_name_plural': 'AI configuration',
                'db_table': 'ai_configuration',
            },
        ),
        migrations.CreateModel(
            name='QuizRequestLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('success', models.BooleanField(default=False, verbose_name='Succeeded')),
                ('question_count', models.PositiveSmallIntegerField(default=0, verbose_name='Questions')),
                ('error_message', models.TextField(blank=True, verbose_name='Error')),
                ('latency_ms', models.PositiveIntegerField(default=0, verbose_name='Latency (ms)')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Requested at')),
                ('note', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quiz_requests', to='notes.note', verbose_name='Note')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quiz_requests', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Quiz request',
                'verbose_name_plural': 'Quiz requests',
                'db_table': 'quiz_request_logs',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'created_at'], name='quiz_req_user_created_idx')],
            },
        ),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ChangeEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('table', models.CharField(choices=[('notes', 'Notes'), ('departments', 'Departments'), ('profiles', 'Profiles')], db_index=True, max_length=20, verbose_name='Table')),
                ('action', models.CharField(choices=[('INSERT', 'Insert'), ('UPDATE', 'Update'), ('DELETE', 'Delete')], max_length=10, verbose_name='Action')),
                ('object_id', models.PositiveBigIntegerField(blank=True, null=True, verbose_name='Object ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
            ],
            options={
                'verbose_name': 'Change event',
                'verbose_name_plural': 'Change events',
                'db_table': 'change_events',
                'ordering': ['id'],
            },
        ),
    ]

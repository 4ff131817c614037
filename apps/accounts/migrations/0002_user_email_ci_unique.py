from django.db import migrations, models
from django.db.models.functions import Lower
import django.db.models.functions.text


def lowercase_emails(apps, schema_editor):
    User = apps.get_model('accounts', 'User')
    User.objects.exclude(email=Lower('email')).update(email=Lower('email'))


class Migration(migrations.Migration):

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(lowercase_emails, migrations.RunPython.noop),
        migrations.AddConstraint(
            model_name='user',
            constraint=models.UniqueConstraint(django.db.models.functions.text.Lower('email'), name='user_email_ci_unique'),
        ),
    ]

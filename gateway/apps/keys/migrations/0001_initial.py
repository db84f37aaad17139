from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ApiKey',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('token', models.CharField(help_text='Secret sent in the X-API-Key header', max_length=128, unique=True)),
                ('permission', models.CharField(choices=[('read', 'Read'), ('write', 'Write')], default='read', help_text='Write keys may create, update, delete and toggle', max_length=5)),
                ('label', models.CharField(blank=True, default='', help_text='Who or what the key was issued to', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'API Key',
                'verbose_name_plural': 'API Keys',
                'ordering': ['-created_at'],
            },
        ),
    ]

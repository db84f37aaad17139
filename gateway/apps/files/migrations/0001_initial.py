import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('keys', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='StoredFile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('cid', models.CharField(help_text='Content identifier returned by the object store', max_length=128, unique=True)),
                ('file_name', models.CharField(help_text='Original name of the uploaded file', max_length=255)),
                ('mime_type', models.CharField(help_text='MIME type declared by the uploader', max_length=255)),
                ('size_bytes', models.BigIntegerField(help_text='File size in bytes')),
                ('is_private', models.BooleanField(db_index=True, default=False, help_text='Private files are readable by their owner only')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('api_key', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='files', to='keys.apikey')),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['api_key', '-created_at'], name='files_owner_recent_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('size_bytes__gte', 0)), name='files_size_bytes_non_negative')],
            },
        ),
    ]

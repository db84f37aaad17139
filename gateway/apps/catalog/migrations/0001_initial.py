import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CidTheme',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('cid', models.CharField(help_text='Content id of the theme asset', max_length=128)),
                ('name', models.CharField(max_length=255)),
            ],
            options={
                'verbose_name': 'CID Theme',
                'verbose_name_plural': 'CID Themes',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Doc',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('path', models.CharField(blank=True, default='', max_length=512)),
                ('doc_src', models.TextField(blank=True, default='', help_text='Page source')),
                ('version', models.FloatField(default=0)),
                ('is_children', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='children', to='catalog.doc')),
            ],
            options={
                'verbose_name': 'Doc',
                'verbose_name_plural': 'Docs',
                'ordering': ['id'],
            },
        ),
    ]

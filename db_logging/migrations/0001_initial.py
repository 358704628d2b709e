from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='LogEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateTimeField(db_index=True)),
                ('thread', models.CharField(max_length=255)),
                ('level', models.CharField(db_index=True, max_length=50)),
                ('logger', models.CharField(max_length=255)),
                ('message', models.CharField(max_length=4000)),
                ('exception', models.CharField(blank=True, max_length=2000, null=True)),
                ('host_address', models.CharField(blank=True, max_length=20, null=True)),
                ('username', models.CharField(blank=True, max_length=50, null=True)),
                ('browser', models.CharField(blank=True, max_length=200, null=True)),
                ('url', models.CharField(blank=True, max_length=100, null=True)),
            ],
            options={
                'verbose_name': 'log entry',
                'verbose_name_plural': 'log entries',
                'ordering': ['-date'],
                'abstract': False,
            },
        ),
    ]

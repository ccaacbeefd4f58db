import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('rooms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('phone', models.CharField(max_length=10)),
                ('parent_phone', models.CharField(blank=True, max_length=10)),
                ('national_id', models.CharField(blank=True, help_text='12-digit identity number', max_length=12)),
                ('bed', models.CharField(blank=True, help_text="Bed label, e.g. 'B'", max_length=20)),
                ('rent', models.DecimalField(decimal_places=2, default=0, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('status', models.CharField(choices=[('Active', 'Active'), ('Inactive', 'Inactive')], default='Active', max_length=10)),
                ('profile_image', models.URLField(blank=True, max_length=500)),
                ('id_front_image', models.URLField(blank=True, max_length=500)),
                ('id_back_image', models.URLField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='students', to='accounts.account')),
                ('room', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='students', to='rooms.room')),
            ],
            options={
                'verbose_name': 'Student',
                'verbose_name_plural': 'Students',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['account', 'status'], name='student_account_status_idx'),
                    models.Index(fields=['account', 'room'], name='student_account_room_idx'),
                ],
            },
        ),
    ]

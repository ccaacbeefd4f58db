import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('category', models.CharField(choices=[('Electricity', 'Electricity'), ('Kitchen', 'Kitchen'), ('Maintenance', 'Maintenance'), ('Staff Salary', 'Staff Salary'), ('Internet', 'Internet'), ('Other', 'Other')], default='Other', max_length=20)),
                ('note', models.TextField(blank=True)),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('month', models.CharField(help_text="e.g. 'March 2025'", max_length=20)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expenses', to='accounts.account')),
            ],
            options={
                'verbose_name': 'Expense',
                'verbose_name_plural': 'Expenses',
                'ordering': ['-date'],
                'indexes': [
                    models.Index(fields=['account', 'month'], name='expense_account_month_idx'),
                ],
            },
        ),
    ]

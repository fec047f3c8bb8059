# Generated manually for the loyalty ledger

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('merchants', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='LedgerEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('balance', models.PositiveIntegerField(default=0)),
                ('total_credited', models.PositiveIntegerField(default=0)),
                ('total_rewards', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to=settings.AUTH_USER_MODEL)),
                ('merchant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to='merchants.merchant')),
            ],
            options={
                'db_table': 'ledger_entries',
                'ordering': ['-updated_at'],
                'verbose_name_plural': 'Ledger entries',
                'constraints': [
                    models.UniqueConstraint(fields=('account', 'merchant'), name='unique_ledger_entry_per_account_merchant'),
                    models.CheckConstraint(condition=models.Q(('balance__lte', models.F('total_credited'))), name='ledger_balance_not_above_total_credited'),
                ],
            },
        ),
        migrations.CreateModel(
            name='RewardRedemption',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('rewards_earned', models.PositiveIntegerField()),
                ('balance_before', models.PositiveIntegerField(help_text='Balance (including the credited items) that crossed the threshold')),
                ('threshold', models.PositiveIntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='reward_redemptions', to=settings.AUTH_USER_MODEL)),
                ('entry', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='redemptions', to='ledger.ledgerentry')),
                ('merchant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='reward_redemptions', to='merchants.merchant')),
            ],
            options={
                'db_table': 'reward_redemptions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['account', 'created_at'], name='redemption_account_idx'),
                ],
            },
        ),
    ]

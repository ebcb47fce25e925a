import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StockBalance',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=3, default=0, max_digits=14, verbose_name='quantity')),
                ('uom', models.CharField(choices=[('pcs', 'Pieces'), ('bags', 'Bags')], max_length=8, verbose_name='unit of measure')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('product', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='stock_balance', to='catalog.product', verbose_name='product')),
            ],
            options={
                'verbose_name': 'stock balance',
                'verbose_name_plural': 'stock balances',
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('quantity__gte', 0)), name='stock_balance_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LedgerEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity_change', models.DecimalField(decimal_places=3, max_digits=14, verbose_name='quantity change')),
                ('unit_of_measure', models.CharField(choices=[('pcs', 'Pieces'), ('bags', 'Bags')], max_length=8, verbose_name='unit of measure')),
                ('source_table', models.CharField(help_text='Name of the table that initiated this change', max_length=64, verbose_name='source table')),
                ('source_transaction_id', models.UUIDField(blank=True, help_text='ID of the record in source_table', null=True, verbose_name='source transaction ID')),
                ('notes', models.TextField(blank=True, default='', verbose_name='notes')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to='catalog.product', verbose_name='product')),
            ],
            options={
                'verbose_name': 'ledger entry',
                'verbose_name_plural': 'ledger entries',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['product', 'created_at'], name='ledger_product_created_idx'),
                    models.Index(fields=['source_table', 'source_transaction_id'], name='ledger_source_idx'),
                ],
            },
        ),
    ]

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Machine',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255, verbose_name='name')),
                ('serial_number', models.CharField(max_length=100, unique=True, verbose_name='serial number')),
                ('process_type', models.CharField(choices=[('BLOW_MOULDING', 'Blow moulding'), ('INJECTION_MOULDING', 'Injection moulding'), ('EXTRUSION', 'Extrusion'), ('THERMOFORMING', 'Thermoforming')], max_length=20, verbose_name='process type')),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('MAINTENANCE', 'Maintenance'), ('RETIRED', 'Retired')], db_index=True, default='ACTIVE', max_length=12, verbose_name='status')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
            ],
            options={
                'verbose_name': 'machine',
                'verbose_name_plural': 'machines',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sku', models.CharField(max_length=64, unique=True, verbose_name='SKU')),
                ('name', models.CharField(max_length=255, verbose_name='name')),
                ('product_type', models.CharField(choices=[('RAW_MATERIAL', 'Raw material'), ('FINISHED_GOOD', 'Finished good'), ('MASTER_BATCH', 'Master batch'), ('REGRIND_MATERIAL', 'Regrind material')], db_index=True, max_length=20, verbose_name='type')),
                ('description', models.TextField(blank=True, null=True, verbose_name='description')),
                ('uom', models.CharField(choices=[('pcs', 'Pieces'), ('bags', 'Bags')], max_length=8, verbose_name='unit of measure')),
                ('color', models.CharField(blank=True, max_length=64, null=True, verbose_name='color')),
                ('size', models.CharField(blank=True, max_length=64, null=True, verbose_name='size')),
                ('target_production_per_shift', models.PositiveIntegerField(blank=True, null=True, verbose_name='target production per shift')),
                ('machine_type', models.CharField(blank=True, max_length=64, null=True, verbose_name='machine type')),
                ('reorder_level', models.DecimalField(decimal_places=3, default=Decimal('0'), help_text='Stock at or below this level raises a reorder alert', max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='reorder level')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
                ('parent_master_batch', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='finished_goods_using_master_batch', to='catalog.product', verbose_name='master batch')),
                ('parent_raw_material', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='finished_goods_using_raw_material', to='catalog.product', verbose_name='default raw material')),
            ],
            options={
                'verbose_name': 'product',
                'verbose_name_plural': 'products',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['product_type', 'name'], name='product_type_name_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(models.Q(('product_type', 'FINISHED_GOOD'), ('uom', 'pcs')), models.Q(('product_type__in', ['RAW_MATERIAL', 'MASTER_BATCH', 'REGRIND_MATERIAL']), ('uom', 'bags')), _connector='OR'), name='product_uom_matches_type'),
                    models.CheckConstraint(condition=models.Q(('reorder_level__gte', 0)), name='product_reorder_level_non_negative'),
                ],
            },
        ),
    ]

import uuid
from decimal import Decimal

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
            name='ProductionRun',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('shift', models.CharField(choices=[('DAY', 'Day'), ('NIGHT', 'Night')], max_length=5, verbose_name='shift')),
                ('target_quantity', models.PositiveIntegerField(default=0, verbose_name='target quantity')),
                ('actual_pieces_produced', models.PositiveIntegerField(default=0, verbose_name='actual pieces produced')),
                ('waste_quantity', models.PositiveIntegerField(default=0, verbose_name='waste quantity')),
                ('raw_material_bags_used', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14, verbose_name='raw material bags used')),
                ('master_batch_bags_used', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14, verbose_name='master batch bags used')),
                ('started_at', models.DateTimeField(blank=True, null=True, verbose_name='started at')),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='completed at')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('machine', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='production_runs', to='catalog.machine', verbose_name='machine')),
                ('master_batch', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.product', verbose_name='master batch')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='production_runs', to='catalog.product', verbose_name='finished good')),
                ('raw_material', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.product', verbose_name='raw material')),
            ],
            options={
                'verbose_name': 'production run',
                'verbose_name_plural': 'production runs',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['machine', 'created_at'], name='run_machine_created_idx'),
                    models.Index(fields=['product', 'created_at'], name='run_product_created_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('raw_material_bags_used__gte', 0), ('master_batch_bags_used__gte', 0)), name='production_run_bags_non_negative'),
                    models.CheckConstraint(condition=models.Q(('started_at__isnull', True), ('completed_at__isnull', True), ('completed_at__gte', models.F('started_at')), _connector='OR'), name='production_run_completed_after_start'),
                ],
            },
        ),
    ]

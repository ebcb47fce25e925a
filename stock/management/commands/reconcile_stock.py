"""
Stock — Management Command: reconcile_stock

Compares each StockBalance with the sum of its ledger entries and,
optionally, checks that a production run has all of its legs.

Usage::

    python manage.py reconcile_stock
    python manage.py reconcile_stock --product <uuid>
    python manage.py reconcile_stock --run <uuid>

Read-only. Exits non-zero when drift or a partial run is found.

@file stock/management/commands/reconcile_stock.py
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import PartialFailureError, ResourceNotFoundError
from stock.services import ReconciliationService

logger = logging.getLogger('alphapack')


class Command(BaseCommand):
    help = 'Check stock balances against the ledger and production runs against their legs.'

    def add_arguments(self, parser):
        parser.add_argument('--product', type=str, help='Check a single product.')
        parser.add_argument('--run', type=str, help='Check a single production run.')

    def handle(self, *args, **options):
        try:
            if options.get('run'):
                self._check_run(options['run'])
            elif options.get('product'):
                self._check_product(options['product'])
            else:
                self._check_all()
        except ResourceNotFoundError as exc:
            raise CommandError(str(exc.detail))

    def _check_run(self, run_id):
        try:
            legs = ReconciliationService.verify_production_run(run_id)
        except PartialFailureError as exc:
            raise CommandError(
                f'Run {run_id} is partially applied. '
                f'Applied: {", ".join(exc.applied) or "none"}; '
                f'missing: {", ".join(exc.missing)}.'
            )
        names = ', '.join(leg['leg'] for leg in legs) or 'no legs expected'
        self.stdout.write(self.style.SUCCESS(f'Run {run_id} complete ({names}).'))

    def _check_product(self, product_id):
        result = ReconciliationService.verify_balance(product_id)
        if not result['consistent']:
            raise CommandError(
                f'Product {product_id}: balance {result["quantity"]} '
                f'!= ledger {result["ledger_total"]} (drift {result["drift"]}).'
            )
        self.stdout.write(self.style.SUCCESS(
            f'Product {product_id} consistent at {result["quantity"]}.'
        ))

    def _check_all(self):
        drifted = ReconciliationService.find_drift()
        for row in drifted:
            self.stdout.write(self.style.ERROR(
                f'{row["product_id"]}: balance {row["quantity"]} '
                f'!= ledger {row["ledger_total"]} (drift {row["drift"]})'
            ))
        if drifted:
            raise CommandError(f'{len(drifted)} balance(s) out of step with the ledger.')
        self.stdout.write(self.style.SUCCESS('All balances match the ledger.'))

"""
Stock — Celery Tasks

Periodic checks over balances: reorder alerts and ledger reconciliation.
Both are read-only.

@file stock/tasks.py
"""

import logging

from celery import shared_task

logger = logging.getLogger('alphapack')


@shared_task(name='stock.check_reorder_levels')
def check_reorder_levels_task():
    """
    Hourly task: log raw materials and master batches at or below their
    reorder level.
    """
    from .services import StockQueryService

    alerts = StockQueryService.reorder_alerts()
    for row in alerts:
        logger.warning(
            'Reorder alert: %s (%s) at %s %s, reorder level %s.',
            row['sku'], row['product_type'], row['quantity'],
            row['unit_of_measure'], row['reorder_level'],
        )
    return {'alert_count': len(alerts), 'skus': [row['sku'] for row in alerts]}


@shared_task(name='stock.reconcile_balances')
def reconcile_balances_task():
    """Nightly task: compare every balance with the sum of its ledger entries."""
    from .services import ReconciliationService

    drifted = ReconciliationService.find_drift()
    logger.info('reconcile_balances_task completed: %d drifted balance(s).', len(drifted))
    return {
        'drift_count': len(drifted),
        'product_ids': [str(row['product_id']) for row in drifted],
    }

"""
Core — Constants

Shared constants: audit actions, ledger source tables, pagination limits.

@file core/constants.py
"""

from decimal import Decimal

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_STATUS_CHANGE = 'STATUS_CHANGE'
AUDIT_ACTION_STOCK_ADJUSTMENT = 'STOCK_ADJUSTMENT'

# Ledger source tables. Manual adjustments reference the balance row;
# production legs reference the run that minted them.
SOURCE_TABLE_MANUAL = 'products_stock'
SOURCE_TABLE_PRODUCTION = 'production_runs'

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200

QUANTITY_MAX_DIGITS = 14
QUANTITY_DECIMAL_PLACES = 3

# Largest magnitude a quantity column can hold (14 digits, 3 after the point).
QUANTITY_MAX = (Decimal(10) ** (QUANTITY_MAX_DIGITS - QUANTITY_DECIMAL_PLACES)
                - Decimal(1).scaleb(-QUANTITY_DECIMAL_PLACES))

# Piece counts are stored in PositiveIntegerField (32-bit on every backend).
PIECES_MAX = 2147483647

"""
Core — Pagination

StandardPagination serves the catalog, stock level and production run
listings. The ledger is append-only and grows without bound, so it pages
by cursor over created_at instead of by page number: a page never shifts
when new entries land while a client is walking it.

@file core/pagination.py
"""

from rest_framework.pagination import CursorPagination, PageNumberPagination

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class StandardPagination(PageNumberPagination):
    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE


class LedgerCursorPagination(CursorPagination):
    """Newest entries first. The response carries next/previous cursors and no count."""

    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE
    ordering = '-created_at'

"""
Core — Exception Handler Tests

Every error leaves the API in the standard envelope with a stable code and
a retryable flag.

@file core/tests/test_exceptions.py
"""

from django.http import Http404
from rest_framework import serializers, status

from core.exceptions import (
    InsufficientStockError,
    LockTimeoutError,
    PartialFailureError,
    PersistenceFailure,
    standard_exception_handler,
)


def _handle(exc):
    return standard_exception_handler(exc, {})


class TestStandardExceptionHandler:

    def test_insufficient_stock_is_409_not_retryable(self):
        response = _handle(InsufficientStockError(detail='Insufficient stock.'))
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['success'] is False
        assert response.data['code'] == 'INSUFFICIENT_STOCK'
        assert response.data['error'] == 'Insufficient stock.'
        assert response.data['retryable'] is False

    def test_lock_timeout_is_retryable(self):
        response = _handle(LockTimeoutError())
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['code'] == 'LOCK_TIMEOUT'
        assert response.data['retryable'] is True

    def test_persistence_failure_hides_detail(self):
        response = _handle(PersistenceFailure())
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['code'] == 'PERSISTENCE_FAILURE'
        assert response.data['error'] == 'Stock change could not be saved.'

    def test_partial_failure_lists_legs(self):
        exc = PartialFailureError(applied=['FINISHED_GOOD'], missing=['RAW_MATERIAL'])
        response = _handle(exc)
        assert response.data['code'] == 'PARTIAL_FAILURE'
        assert response.data['errors']['applied'] == ['FINISHED_GOOD']
        assert response.data['errors']['missing'] == ['RAW_MATERIAL']

    def test_serializer_errors_become_validation_error(self):
        exc = serializers.ValidationError({'delta': ['delta must be non-zero.']})
        response = _handle(exc)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'
        assert response.data['error'] == 'delta must be non-zero.'
        assert response.data['errors']['delta'] == ['delta must be non-zero.']

    def test_http404_becomes_not_found(self):
        response = _handle(Http404())
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'NOT_FOUND'

    def test_unhandled_exception_is_generic(self):
        response = _handle(RuntimeError('relation "stock_balance" does not exist'))
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['code'] == 'INTERNAL_ERROR'
        assert 'stock_balance' not in response.data['error']

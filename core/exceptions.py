"""
Core — Exception Handling

Domain exception taxonomy for the inventory ledger and the DRF exception
handler that renders every error in the standard API envelope.

Every exception carries a machine-readable code and a safe message. No SQL
text, internal identifiers or stack detail leaves the API boundary.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('alphapack')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Malformed, out-of-range or unknown-enum input. Rejected before any mutation."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'VALIDATION_ERROR'
    retryable = False


class ResourceNotFoundError(APIException):
    """Missing product, machine, balance or run. Rejected before any mutation."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'NOT_FOUND'
    retryable = False


class InsufficientStockError(APIException):
    """The requested change would drive a balance negative."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Insufficient stock for this operation.'
    default_code = 'INSUFFICIENT_STOCK'
    retryable = False


class LockTimeoutError(APIException):
    """Waiting for a balance lock exceeded the configured bound. Safe to retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Stock record is busy. Please retry.'
    default_code = 'LOCK_TIMEOUT'
    retryable = True


class PersistenceFailure(APIException):
    """Storage-layer fault. The enclosing transaction was rolled back."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Stock change could not be saved.'
    default_code = 'PERSISTENCE_FAILURE'
    retryable = False


class PartialFailureError(APIException):
    """
    A compound operation has a proper subset of its legs applied.

    ``applied`` and ``missing`` hold leg names (e.g. ``FINISHED_GOOD``) so
    operators can reconcile without internal identifiers being exposed.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Operation was only partially applied; reconciliation required.'
    default_code = 'PARTIAL_FAILURE'
    retryable = False

    def __init__(self, detail=None, code=None, *, applied=(), missing=()):
        super().__init__(detail=detail, code=code)
        self.applied = list(applied)
        self.missing = list(missing)


class DuplicateResourceError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'DUPLICATE_RESOURCE'
    retryable = False


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def _first_message(errors) -> str:
    """Pull one human-readable message out of a DRF error structure."""
    if isinstance(errors, dict):
        if 'detail' in errors:
            return _first_message(errors['detail'])
        for value in errors.values():
            return _first_message(value)
        return ''
    if isinstance(errors, (list, tuple)):
        return _first_message(errors[0]) if errors else ''
    return str(errors)


def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "error": "...", "errors": {...},
        "code": "ERROR_CODE", "retryable": bool }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ValidationError):
        errors = exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages}
        data = {
            'success': False,
            'error': _first_message(errors),
            'errors': errors,
            'code': 'VALIDATION_ERROR',
            'retryable': False,
        }
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            {
                'success': False,
                'error': 'Internal server error.',
                'errors': {'detail': ['Internal server error.']},
                'code': 'INTERNAL_ERROR',
                'retryable': False,
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = getattr(exc, 'default_code', 'ERROR')
    if response.status_code == status.HTTP_400_BAD_REQUEST and code == 'invalid':
        code = 'VALIDATION_ERROR'

    if isinstance(response.data, dict):
        errors = response.data
        code = errors.pop('code', code)
    elif isinstance(response.data, list):
        errors = {'detail': response.data}
    else:
        errors = {'detail': [str(response.data)]}

    if isinstance(exc, PartialFailureError):
        errors['applied'] = exc.applied
        errors['missing'] = exc.missing

    response.data = {
        'success': False,
        'error': _first_message(errors),
        'errors': errors,
        'code': code,
        'retryable': getattr(exc, 'retryable', False),
    }
    return response

"""
Stock — Views

Manual adjustment, stock levels, reorder alerts and the read-only ledger.

@file stock/views.py
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import LedgerCursorPagination
from users.models import STOCK_ADJUST_ROLES
from users.permissions import HasRole, IsAdmin

from .serializers import (
    LedgerEntrySerializer,
    ReconciliationSerializer,
    StockAdjustSerializer,
    StockLevelSerializer,
)
from .services import AdjustmentService, ReconciliationService, StockQueryService


class StockAdjustView(APIView):
    """POST /v1/stock/adjust — Apply a manual stock adjustment."""
    permission_classes = [IsAuthenticated, HasRole]
    required_roles = STOCK_ADJUST_ROLES
    throttle_scope = 'stock_write'

    def post(self, request):
        serializer = StockAdjustSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        ledger_id = AdjustmentService.adjust(
            balance_id=data.get('balance_id'),
            product_id=data['product_id'],
            delta=data['delta'],
            unit=data['unit'],
            note=data['note'],
            actor=request.user,
        )
        return Response(
            {'success': True, 'ledger_id': str(ledger_id)},
            status=status.HTTP_201_CREATED,
        )


class StockLevelViewSet(viewsets.ViewSet):
    """
    Current stock per product.

    list:           GET /v1/stock/levels/?product_type=&search=
    retrieve:       GET /v1/stock/levels/{product_id}/
    reorder_alerts: GET /v1/stock/levels/reorder-alerts/
    reconcile:      GET /v1/stock/levels/{product_id}/reconcile/ (ADMIN)
    """
    permission_classes = [IsAuthenticated]

    def list(self, request):
        rows = StockQueryService.list_levels(
            product_type=request.query_params.get('product_type') or None,
            search=request.query_params.get('search') or None,
        )
        return Response(StockLevelSerializer(rows, many=True).data)

    def retrieve(self, request, pk=None):
        row = StockQueryService.get_level(pk)
        return Response(StockLevelSerializer(row).data)

    @action(detail=False, methods=['get'], url_path='reorder-alerts')
    def reorder_alerts(self, request):
        rows = StockQueryService.reorder_alerts()
        return Response(StockLevelSerializer(rows, many=True).data)

    @action(detail=True, methods=['get'], permission_classes=[IsAdmin])
    def reconcile(self, request, pk=None):
        result = ReconciliationService.verify_balance(pk)
        return Response(ReconciliationSerializer(result).data)


class LedgerEntryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Immutable stock journal. ADMIN only.

    Filters: ?product=&source_table=&source_transaction_id=
    """
    serializer_class = LedgerEntrySerializer
    permission_classes = [IsAdmin]
    pagination_class = LedgerCursorPagination
    filterset_fields = ['product', 'source_table', 'source_transaction_id']
    search_fields = ['notes', 'product__sku']
    ordering_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        return StockQueryService.ledger_for()

"""
Production — Views

@file production/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.constants import SOURCE_TABLE_PRODUCTION
from stock.serializers import LedgerEntrySerializer
from stock.services import StockQueryService
from users.models import RUN_RECORD_ROLES
from users.permissions import HasRole

from .models import ProductionRun
from .serializers import ProductionRunCreateSerializer, ProductionRunReadSerializer
from .services import ProductionRunCoordinator


class ProductionRunViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    Production runs are recorded once and never edited.

    create: POST /v1/production/runs/
    ledger: GET  /v1/production/runs/{id}/ledger/
    """
    required_roles = RUN_RECORD_ROLES
    filterset_fields = ['product', 'machine', 'shift']
    ordering_fields = ['created_at', 'actual_pieces_produced']
    ordering = ['-created_at']

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated(), HasRole()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.action == 'create':
            self.throttle_scope = 'stock_write'
        return super().get_throttles()

    def get_queryset(self):
        return ProductionRun.objects.select_related('product', 'machine')

    def get_serializer_class(self):
        if self.action == 'create':
            return ProductionRunCreateSerializer
        return ProductionRunReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        run = ProductionRunCoordinator.record_run(
            actor=request.user, **serializer.validated_data,
        )
        return Response(
            {'success': True, 'production_run_id': str(run.pk)},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['get'])
    def ledger(self, request, pk=None):
        run = self.get_object()
        entries = StockQueryService.ledger_for(
            source_table=SOURCE_TABLE_PRODUCTION,
            source_transaction_id=run.pk,
        )
        return Response(LedgerEntrySerializer(entries, many=True).data)

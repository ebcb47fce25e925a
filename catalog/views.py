"""
Catalog — Views

DRF ViewSets for products and machines. Reads are open to any
authenticated user; create/update are ADMIN only. Nothing is deleted.

@file catalog/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.response import Response

from users.permissions import IsAdminOrReadOnly

from .models import Machine, Product
from .serializers import (
    MachineReadSerializer,
    MachineWriteSerializer,
    ProductReadSerializer,
    ProductWriteSerializer,
)
from .services import MachineService, ProductService


class CatalogViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """List / retrieve / create / update; writes answer with the read serializer."""

    permission_classes = [IsAdminOrReadOnly]
    read_serializer_class = None
    write_serializer_class = None

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return self.read_serializer_class
        return self.write_serializer_class

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        read_ser = self.read_serializer_class(serializer.instance, context={'request': request})
        return Response(read_ser.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        read_ser = self.read_serializer_class(serializer.instance, context={'request': request})
        return Response(read_ser.data)


class ProductViewSet(CatalogViewSet):
    read_serializer_class = ProductReadSerializer
    write_serializer_class = ProductWriteSerializer
    filterset_fields = ['product_type', 'uom']
    search_fields = ['sku', 'name']
    ordering_fields = ['name', 'sku', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Product.objects.select_related('stock_balance')

    def perform_create(self, serializer):
        serializer.instance = ProductService.create_product(
            actor=self.request.user, **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = ProductService.update_product(
            product_id=serializer.instance.pk,
            actor=self.request.user,
            **serializer.validated_data,
        )


class MachineViewSet(CatalogViewSet):
    read_serializer_class = MachineReadSerializer
    write_serializer_class = MachineWriteSerializer
    filterset_fields = ['status', 'process_type']
    search_fields = ['name', 'serial_number']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Machine.objects.all()

    def perform_create(self, serializer):
        serializer.instance = MachineService.create_machine(
            actor=self.request.user, **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = MachineService.update_machine(
            machine_id=serializer.instance.pk,
            actor=self.request.user,
            **serializer.validated_data,
        )

"""
Alpha Inventory — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'Alpha Inventory Administration'
admin.site.site_title = 'Alpha Inventory'
admin.site.index_title = 'Plant Stock Ledger'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """Alpha Inventory API v1 — endpoint directory."""
    return Response({
        'auth': {
            'login': reverse('api-v1:auth:login', request=request, format=format),
            'refresh': reverse('api-v1:auth:token-refresh', request=request, format=format),
            'me': reverse('api-v1:auth:me', request=request, format=format),
        },
        'catalog': {
            'products': reverse('api-v1:catalog:product-list', request=request, format=format),
            'machines': reverse('api-v1:catalog:machine-list', request=request, format=format),
        },
        'stock': {
            'adjust': reverse('api-v1:stock:adjust', request=request, format=format),
            'levels': reverse('api-v1:stock:level-list', request=request, format=format),
            'reorder_alerts': reverse('api-v1:stock:level-reorder-alerts', request=request, format=format),
            'ledger': reverse('api-v1:stock:ledger-list', request=request, format=format),
        },
        'production': {
            'runs': reverse('api-v1:production:run-list', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/', include('users.urls', namespace='auth')),
    path('catalog/', include('catalog.urls', namespace='catalog')),
    path('stock/', include('stock.urls', namespace='stock')),
    path('production/', include('production.urls', namespace='production')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]

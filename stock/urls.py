"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import LedgerEntryViewSet, StockAdjustView, StockLevelViewSet

app_name = 'stock'

router = DefaultRouter()
router.register('levels', StockLevelViewSet, basename='level')
router.register('ledger', LedgerEntryViewSet, basename='ledger')

urlpatterns = [
    path('adjust/', StockAdjustView.as_view(), name='adjust'),
    path('', include(router.urls)),
]

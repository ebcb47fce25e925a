"""
Production — URL Configuration

@file production/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ProductionRunViewSet

app_name = 'production'

router = DefaultRouter()
router.register('runs', ProductionRunViewSet, basename='run')

urlpatterns = [
    path('', include(router.urls)),
]

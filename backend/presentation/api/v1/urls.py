"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views.catalog import ItemViewSet
from .views.bom import BomLineViewSet

# Create router
router = DefaultRouter()

# Catalog
router.register(r'items', ItemViewSet, basename='items')

# BOM
router.register(r'bom-lines', BomLineViewSet, basename='bom-lines')

app_name = 'api_v1'

urlpatterns = [
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('', include(router.urls)),
]

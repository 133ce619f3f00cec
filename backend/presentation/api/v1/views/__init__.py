"""
Views Package.

All API viewsets for the E-Code registry.
"""

from .catalog import ItemViewSet
from .bom import BomLineViewSet

__all__ = [
    'ItemViewSet',
    'BomLineViewSet',
]

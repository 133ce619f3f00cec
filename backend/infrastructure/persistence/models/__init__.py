"""
Persistence Models Package.

All Django ORM models for the E-Code registry.
"""

# Base mixins
from .base import (
    TimeStampedMixin,
    VersionedMixin,
    AuditMixin,
)

# Catalog models
from .catalog import Item

# BOM models
from .bom import BomLine


__all__ = [
    # Base
    'TimeStampedMixin',
    'VersionedMixin',
    'AuditMixin',
    # Catalog
    'Item',
    # BOM
    'BomLine',
]

"""
Application Services.

Use-case orchestration on top of the domain layer. Registries receive
repository implementations from the caller (see presentation.api).
"""

from .bom import BomRegistry
from .catalog import ItemRegistry
from .results import BulkResult, RowError

__all__ = [
    'BomRegistry',
    'ItemRegistry',
    'BulkResult',
    'RowError',
]

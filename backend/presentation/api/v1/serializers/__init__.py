"""
Serializers Package.

All API serializers for the E-Code registry.
"""

from .base import (
    BulkIdsSerializer,
    BulkResultSerializer,
    HistoryEntrySerializer,
)
from .catalog import (
    CodePreviewSerializer,
    ItemDetailSerializer,
    ItemListSerializer,
    ItemWriteSerializer,
)
from .bom import (
    AttachCodeSerializer,
    AttachParentSerializer,
    BomLineSerializer,
    BomLineWriteSerializer,
    BomTreeNodeSerializer,
)

"""
Catalog Domain - Repository Interfaces (Ports).

These are abstract interfaces that define how the domain interacts with persistence.
The actual implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from .entities import CatalogItem


class ItemRepository(ABC):
    """
    Repository interface for catalog items.

    Implementations must enforce uniqueness of ``sequence_no`` and
    ``electronic_code`` and raise ``DuplicateKeyException`` on collision.
    """

    @abstractmethod
    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[CatalogItem]:
        """
        List items matching all ``filters``.

        Keys are field lookups: ``field`` (equality), ``field__contains``,
        ``field__icontains``.
        """

    @abstractmethod
    def get(self, item_id: UUID) -> CatalogItem:
        """Get item by ID or raise EntityNotFoundException."""

    @abstractmethod
    def find_by_code(self, code: str) -> Optional[CatalogItem]:
        """Get item by exact electronic code."""

    @abstractmethod
    def max_sequence_no(self) -> Optional[int]:
        """Current persisted maximum sequence number, ``None`` when empty."""

    @abstractmethod
    def last_code(self) -> Optional[str]:
        """Greatest electronic code in lexical order."""

    @abstractmethod
    def create(self, item: CatalogItem, actor: Any = None) -> CatalogItem:
        """Insert a new item."""

    @abstractmethod
    def create_many(self, items: Iterable[CatalogItem], actor: Any = None) -> List[CatalogItem]:
        """Insert several items in one transaction."""

    @abstractmethod
    def update_by_id(
        self,
        item_id: UUID,
        item: CatalogItem,
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> CatalogItem:
        """Persist ``item`` over the stored record with ``item_id``."""

    @abstractmethod
    def delete_by_id(self, item_id: UUID) -> None:
        """Delete item or raise EntityNotFoundException."""

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every item, returning the count."""

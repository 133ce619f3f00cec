"""
BOM Domain - Repository Interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from .entities import BomLine


class BomLineRepository(ABC):
    """Repository interface for BOM lines. No referential integrity is enforced."""

    @abstractmethod
    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[BomLine]:
        """List lines matching all ``filters`` (field lookups, see ItemRepository.list)."""

    @abstractmethod
    def get(self, line_id: UUID) -> BomLine:
        """Get line by ID or raise EntityNotFoundException."""

    @abstractmethod
    def max_line_no(self) -> Optional[int]:
        """Current persisted maximum line number, ``None`` when empty."""

    @abstractmethod
    def create(self, line: BomLine, actor: Any = None) -> BomLine:
        """Insert a new line."""

    @abstractmethod
    def create_many(self, lines: Iterable[BomLine], actor: Any = None) -> List[BomLine]:
        """Insert several lines in one transaction."""

    @abstractmethod
    def update_by_id(
        self,
        line_id: UUID,
        line: BomLine,
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> BomLine:
        """Persist ``line`` over the stored record with ``line_id``."""

    @abstractmethod
    def delete_by_id(self, line_id: UUID) -> None:
        """Delete line or raise EntityNotFoundException. Never cascades."""

"""
BOM Services.

BomRegistry owns the BOM line use cases. Lines look items up in the code
registry only to copy display fields when a code is selected; nothing here
enforces that a code or parent code exists.
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from domain.bom.entities import BomLine
from domain.bom.linker import attach_code, attach_parent, validate_for_save
from domain.bom.repositories import BomLineRepository
from domain.bom.tree import TreeNode, build_tree
from domain.catalog.codes import next_sequence_no
from domain.catalog.repositories import ItemRepository
from domain.shared.exceptions import (
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
)

from .results import BulkResult, RowError

logger = logging.getLogger(__name__)


class BomRegistry:
    """BOM line use cases."""

    def __init__(self, repository: BomLineRepository, items: ItemRepository):
        self.repository = repository
        self.items = items

    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[BomLine]:
        return self.repository.list(filters)

    def get(self, line_id: UUID) -> BomLine:
        return self.repository.get(line_id)

    def next_line_no(self) -> int:
        return next_sequence_no(self.repository.max_line_no())

    def tree(self, filters: Optional[Mapping[str, Any]] = None) -> List[TreeNode]:
        return build_tree(self.repository.list(filters))

    def create(self, data: Mapping[str, Any], actor: Any = None) -> BomLine:
        line = BomLine.from_data(data)
        if not line.line_no:
            line.line_no = self.next_line_no()
        validate_for_save(line)
        created = self.repository.create(line, actor=actor)
        logger.info(f"Created BOM line {created.line_no} ({created.electronic_code})")
        return created

    def update(
        self,
        line_id: UUID,
        changes: Mapping[str, Any],
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> BomLine:
        line = self.repository.get(line_id)
        self._check_version(line, expected_version)
        changed = line.apply_changes(changes)
        validate_for_save(line)
        if not changed:
            return line
        return self.repository.update_by_id(
            line_id, line, expected_version=expected_version, actor=actor
        )

    def delete(self, line_id: UUID) -> None:
        """Delete a line. Children pointing at its code keep their parent_code."""
        self.repository.delete_by_id(line_id)
        logger.info(f"Deleted BOM line {line_id}")

    def attach_code(
        self,
        line_id: UUID,
        code: str,
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> BomLine:
        """
        Select an item code for a line, copying its display fields.

        A code that matches no item leaves the line untouched and unsaved.
        """
        line = self.repository.get(line_id)
        self._check_version(line, expected_version)
        item = self.items.find_by_code(code)
        linked = attach_code(line, code, [item] if item is not None else [])
        if linked is line:
            logger.debug(f"No item with code {code!r}; BOM line {line_id} left unchanged")
            return line
        return self.repository.update_by_id(
            line_id, linked, expected_version=expected_version, actor=actor
        )

    def attach_parent(
        self,
        line_id: UUID,
        parent_code: Optional[str],
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> BomLine:
        line = self.repository.get(line_id)
        self._check_version(line, expected_version)
        linked = attach_parent(line, parent_code)
        return self.repository.update_by_id(
            line_id, linked, expected_version=expected_version, actor=actor
        )

    def bulk_create(
        self,
        rows: Iterable[Mapping[str, Any]],
        actor: Any = None,
        first_row: int = 1,
    ) -> BulkResult:
        result = BulkResult()
        for row_no, row in enumerate(rows, start=first_row):
            try:
                line = self.create(row, actor=actor)
            except DomainException as exc:
                result.errors.append(RowError.from_exception(row_no, exc))
                continue
            result.succeeded.append(line.id)
        logger.info(
            f"Bulk BOM import: {len(result.succeeded)} created, {len(result.errors)} failed"
        )
        return result

    def bulk_delete(self, line_ids: Iterable[UUID]) -> BulkResult:
        result = BulkResult()
        for line_id in line_ids:
            try:
                self.repository.delete_by_id(line_id)
            except EntityNotFoundException as exc:
                result.errors.append(RowError.from_exception(str(line_id), exc))
                continue
            result.succeeded.append(line_id)
        logger.info(
            f"Bulk BOM delete: {len(result.succeeded)} deleted, {len(result.errors)} failed"
        )
        return result

    @staticmethod
    def _check_version(line: BomLine, expected_version: Optional[int]) -> None:
        if expected_version is not None and line.version != expected_version:
            raise ConcurrencyException('BomLine', line.id, expected_version)

"""
Catalog Services.

ItemRegistry owns the use cases of the code registry: registering items
with a fresh sequence number, editing them (re-deriving the electronic
code when classification changes) and best-effort bulk operations.
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from domain.catalog.codes import next_sequence_no
from domain.catalog.entities import CatalogItem
from domain.catalog.repositories import ItemRepository
from domain.shared.exceptions import (
    ConcurrencyException,
    DomainException,
    DuplicateKeyException,
    EntityNotFoundException,
    ValidationException,
)
from domain.shared.value_objects import as_int

from .results import BulkResult, RowError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


class ItemRegistry:
    """
    Code registry use cases.

    Creating an item follows ComputeNext -> Validate -> Insert. When the
    store rejects the insert with a duplicate key and the sequence number was
    computed here, the current maximum is re-read and the insert retried, at
    most ``max_attempts`` times in total. A sequence number supplied by the
    caller is never replaced: its conflict is raised straight away.
    """

    def __init__(self, repository: ItemRepository, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.repository = repository
        self.max_attempts = max(1, int(max_attempts))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[CatalogItem]:
        return self.repository.list(filters)

    def get(self, item_id: UUID) -> CatalogItem:
        return self.repository.get(item_id)

    def next_sequence_no(self) -> int:
        return next_sequence_no(self.repository.max_sequence_no())

    def last_code(self) -> Optional[str]:
        return self.repository.last_code()

    def preview(self, data: Mapping[str, Any]) -> CatalogItem:
        """Item as it would be registered now, without saving it."""
        sequence_no = as_int(data.get('sequence_no'), 'sequence_no')
        if sequence_no is None:
            sequence_no = self.next_sequence_no()
        item = CatalogItem.from_data(data, sequence_no=sequence_no)
        item.rederive()
        return item

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create(self, data: Mapping[str, Any], actor: Any = None) -> CatalogItem:
        requested = as_int(data.get('sequence_no'), 'sequence_no')
        attempts = 1 if requested is not None else self.max_attempts

        for attempt in range(1, attempts + 1):
            sequence_no = requested if requested is not None else self.next_sequence_no()
            item = self._build(data, sequence_no)
            try:
                created = self.repository.create(item, actor=actor)
            except DuplicateKeyException as exc:
                if attempt >= attempts:
                    logger.warning(
                        f"Item registration rejected: duplicate {exc.field}={exc.value} "
                        f"(attempt {attempt}/{attempts})"
                    )
                    raise
                logger.info(
                    f"Sequence {sequence_no} taken by a concurrent session, "
                    f"recomputing (attempt {attempt}/{attempts})"
                )
                continue
            logger.info(f"Registered item {created.electronic_code}")
            return created

    def update(
        self,
        item_id: UUID,
        changes: Mapping[str, Any],
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> CatalogItem:
        item = self.repository.get(item_id)
        if expected_version is not None and item.version != expected_version:
            raise ConcurrencyException('Item', item_id, expected_version)

        previous_code = item.electronic_code
        changed = item.apply_changes(changes)
        item.validate()
        if not changed:
            return item

        updated = self.repository.update_by_id(
            item_id, item, expected_version=expected_version, actor=actor
        )
        if updated.electronic_code != previous_code:
            logger.info(f"Item {item_id} code changed {previous_code} -> {updated.electronic_code}")
        return updated

    def delete(self, item_id: UUID) -> None:
        self.repository.delete_by_id(item_id)
        logger.info(f"Deleted item {item_id}")

    # -------------------------------------------------------------------------
    # Bulk
    # -------------------------------------------------------------------------

    def bulk_create(
        self,
        rows: Iterable[Mapping[str, Any]],
        actor: Any = None,
        first_row: int = 1,
    ) -> BulkResult:
        """Register every row independently; failures are reported per row."""
        result = BulkResult()
        for row_no, row in enumerate(rows, start=first_row):
            try:
                item = self.create(row, actor=actor)
            except DomainException as exc:
                result.errors.append(RowError.from_exception(row_no, exc))
                continue
            result.succeeded.append(item.id)
        logger.info(
            f"Bulk item import: {len(result.succeeded)} created, {len(result.errors)} failed"
        )
        return result

    def replace_all(
        self,
        rows: Iterable[Mapping[str, Any]],
        actor: Any = None,
        first_row: int = 1,
    ) -> BulkResult:
        """
        Delete every item, then import ``rows`` best-effort.

        Rows are checked before anything is deleted; when none of them is
        valid the catalog is left as it is and the first row error is raised.
        """
        rows = list(rows)
        first_error = None
        for row_no, row in enumerate(rows, start=first_row):
            try:
                requested = as_int(row.get('sequence_no'), 'sequence_no', record=row_no)
                self._build(row, requested if requested is not None else 1)
            except ValidationException as exc:
                first_error = first_error or exc
                continue
            break
        else:
            if first_error is not None:
                logger.warning(f"Catalog replace refused: none of {len(rows)} rows is valid")
                raise first_error
            raise ValidationException("교체할 행이 없습니다.", field='rows')
        removed = self.repository.delete_all()
        logger.warning(f"Replacing item catalog: removed {removed} items, importing {len(rows)} rows")
        return self.bulk_create(rows, actor=actor, first_row=first_row)

    @staticmethod
    def _build(data: Mapping[str, Any], sequence_no: int) -> CatalogItem:
        item = CatalogItem.from_data(data, sequence_no=sequence_no)
        item.rederive()
        item.validate()
        return item

    def bulk_delete(self, item_ids: Iterable[UUID]) -> BulkResult:
        result = BulkResult()
        for item_id in item_ids:
            try:
                self.repository.delete_by_id(item_id)
            except EntityNotFoundException as exc:
                result.errors.append(RowError.from_exception(str(item_id), exc))
                continue
            result.succeeded.append(item_id)
        logger.info(
            f"Bulk item delete: {len(result.succeeded)} deleted, {len(result.errors)} failed"
        )
        return result

"""
Django ORM implementations of the domain repository ports.

Rows are mapped to plain domain entities on the way out and written back
field by field on the way in. Saves run inside a savepoint so an enclosing
transaction stays usable: a collision with an existing row becomes
``DuplicateKeyException``, a value the column cannot hold becomes
``ValidationException`` and any other integrity error propagates.
Every save records a django-simple-history change reason.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DataError, IntegrityError, transaction
from django.db.models import Max

from domain.bom.entities import BomLine as BomLineEntity
from domain.bom.repositories import BomLineRepository
from domain.catalog.entities import CatalogItem
from domain.catalog.repositories import ItemRepository
from domain.shared.exceptions import (
    ConcurrencyException,
    DuplicateKeyException,
    EntityNotFoundException,
    ValidationException,
)

from .models import BomLine, Item

logger = logging.getLogger(__name__)


ITEM_FIELDS = (
    'sequence_no', 'division', 'industry_code', 'part_group', 'revision',
    'electronic_code', 'item_name', 'item_type', 'status', 'unit',
    'model', 'account_code', 'note', 'author', 'registered_at',
)

BOM_LINE_FIELDS = (
    'line_no', 'industry', 'model', 'item_type', 'level',
    'parent_code', 'electronic_code', 'item_name',
    'quantity', 'unit', 'process', 'note', 'author',
)

AUDIT_FIELDS = ('id', 'version', 'created_at', 'updated_at')


def _to_entity(entity_class, instance, field_names):
    values = {name: getattr(instance, name) for name in AUDIT_FIELDS + field_names}
    return entity_class(**values)


def _copy_fields(instance, entity, field_names):
    """Copy entity values onto the row; returns the names whose value changed."""
    changed = []
    for name in field_names:
        value = getattr(entity, name)
        if value is None and name == 'registered_at':
            continue
        if getattr(instance, name) != value:
            changed.append(name)
        setattr(instance, name, value)
    return changed


def _set_change_reason(instance, changed=None):
    # Stored by django-simple-history on the next save (max 100 chars)
    reason = '등록' if changed is None else '수정: ' + ', '.join(changed)
    instance._change_reason = reason[:100]


def _save_row(obj, entity_type):
    """Save inside a savepoint; values the column rejects become a ValidationException."""
    try:
        with transaction.atomic():
            obj.save()
    except DataError as exc:
        logger.debug(f"{entity_type} save rejected by column constraint: {exc}")
        raise ValidationException(f"저장할 수 없는 값이 있습니다: {exc}", record=obj.pk)


def _set_actor(instance, actor, creating=False):
    if actor is None:
        return
    if creating:
        instance.created_by = actor
    instance.updated_by = actor


class DjangoItemRepository(ItemRepository):
    """Item repository backed by ``persistence.Item``."""

    model = Item

    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[CatalogItem]:
        queryset = self.model.objects.filter(**dict(filters or {})).order_by('sequence_no')
        return [self._to_entity(obj) for obj in queryset]

    def get(self, item_id: UUID) -> CatalogItem:
        return self._to_entity(self._get_instance(item_id))

    def find_by_code(self, code: str) -> Optional[CatalogItem]:
        if not code:
            return None
        obj = self.model.objects.filter(electronic_code=code).first()
        return self._to_entity(obj) if obj is not None else None

    def max_sequence_no(self) -> Optional[int]:
        return self.model.objects.aggregate(m=Max('sequence_no'))['m']

    def last_code(self) -> Optional[str]:
        return self.model.objects.aggregate(m=Max('electronic_code'))['m']

    def create(self, item: CatalogItem, actor: Any = None) -> CatalogItem:
        obj = self.model(id=item.id)
        _copy_fields(obj, item, ITEM_FIELDS)
        _set_change_reason(obj)
        _set_actor(obj, actor, creating=True)
        self._save(obj)
        return self._to_entity(obj)

    def create_many(self, items: Iterable[CatalogItem], actor: Any = None) -> List[CatalogItem]:
        with transaction.atomic():
            return [self.create(item, actor=actor) for item in items]

    def update_by_id(
        self,
        item_id: UUID,
        item: CatalogItem,
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> CatalogItem:
        with transaction.atomic():
            obj = self._get_instance(item_id, for_update=True)
            if expected_version is not None and obj.version != expected_version:
                raise ConcurrencyException('Item', item_id, expected_version)
            _set_change_reason(obj, _copy_fields(obj, item, ITEM_FIELDS))
            _set_actor(obj, actor)
            self._save(obj)
        return self._to_entity(obj)

    def delete_by_id(self, item_id: UUID) -> None:
        self._get_instance(item_id).delete()

    def delete_all(self) -> int:
        count, _ = self.model.objects.all().delete()
        return count

    # -------------------------------------------------------------------------

    def _get_instance(self, item_id, for_update=False):
        queryset = self.model.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=item_id)
        except (self.model.DoesNotExist, DjangoValidationError, ValueError):
            raise EntityNotFoundException('Item', item_id)

    def _save(self, obj):
        """
        Save the row, naming the unique key it collides with.

        Integrity errors that match no existing row (check constraints,
        foreign keys) are re-raised unchanged.
        """
        try:
            _save_row(obj, 'Item')
        except IntegrityError as exc:
            others = self.model.objects.exclude(pk=obj.pk)
            for field in ('sequence_no', 'electronic_code'):
                value = getattr(obj, field)
                if others.filter(**{field: value}).exists():
                    logger.debug(f"Item save rejected by unique key {field}={value}: {exc}")
                    raise DuplicateKeyException('Item', field, value)
            raise

    @staticmethod
    def _to_entity(obj) -> CatalogItem:
        return _to_entity(CatalogItem, obj, ITEM_FIELDS)


class DjangoBomLineRepository(BomLineRepository):
    """BOM line repository backed by ``persistence.BomLine``."""

    model = BomLine

    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[BomLineEntity]:
        queryset = self.model.objects.filter(**dict(filters or {})).order_by('line_no')
        return [self._to_entity(obj) for obj in queryset]

    def get(self, line_id: UUID) -> BomLineEntity:
        return self._to_entity(self._get_instance(line_id))

    def max_line_no(self) -> Optional[int]:
        return self.model.objects.aggregate(m=Max('line_no'))['m']

    def create(self, line: BomLineEntity, actor: Any = None) -> BomLineEntity:
        obj = self.model(id=line.id)
        _copy_fields(obj, line, BOM_LINE_FIELDS)
        _set_change_reason(obj)
        _set_actor(obj, actor, creating=True)
        _save_row(obj, 'BomLine')
        return self._to_entity(obj)

    def create_many(self, lines: Iterable[BomLineEntity], actor: Any = None) -> List[BomLineEntity]:
        with transaction.atomic():
            return [self.create(line, actor=actor) for line in lines]

    def update_by_id(
        self,
        line_id: UUID,
        line: BomLineEntity,
        expected_version: Optional[int] = None,
        actor: Any = None,
    ) -> BomLineEntity:
        with transaction.atomic():
            obj = self._get_instance(line_id, for_update=True)
            if expected_version is not None and obj.version != expected_version:
                raise ConcurrencyException('BomLine', line_id, expected_version)
            _set_change_reason(obj, _copy_fields(obj, line, BOM_LINE_FIELDS))
            _set_actor(obj, actor)
            _save_row(obj, 'BomLine')
        return self._to_entity(obj)

    def delete_by_id(self, line_id: UUID) -> None:
        self._get_instance(line_id).delete()

    def _get_instance(self, line_id, for_update=False):
        queryset = self.model.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=line_id)
        except (self.model.DoesNotExist, DjangoValidationError, ValueError):
            raise EntityNotFoundException('BomLine', line_id)

    @staticmethod
    def _to_entity(obj) -> BomLineEntity:
        return _to_entity(BomLineEntity, obj, BOM_LINE_FIELDS)

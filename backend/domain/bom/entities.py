"""
BOM Domain - Entities.

BomLine represents a single line of the Bill of Materials: a child code,
the code of its parent assembly and the quantity needed.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Dict, Mapping, Set

from domain.shared.base_entity import VersionedEntity
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import DEFAULT_ITEM_TYPE, DEFAULT_UNIT, as_decimal, as_int


EDITABLE_FIELDS = (
    'line_no', 'industry', 'model', 'item_type', 'level',
    'parent_code', 'electronic_code', 'item_name',
    'quantity', 'unit', 'process', 'note', 'author',
)


NUMERIC_FIELDS = ('line_no', 'level', 'quantity')


def _coerce_value(name: str, value: Any, record: Any = None) -> Any:
    if name == 'quantity':
        return as_decimal(value, name, record)
    number = as_int(value, name, record)
    if name == 'level' and number is not None and number < 1:
        raise ValidationException(f"레벨은 1 이상이어야 합니다 ({number})", field=name, value=number, record=record)
    if name == 'line_no' and number is not None and number < 1:
        raise ValidationException.not_allowed(name, number, record=record)
    return number


@dataclass(eq=False)
class BomLine(VersionedEntity):
    """
    A single BOM line.

    ``electronic_code`` references a catalog item by string equality only,
    and ``parent_code`` is the electronic code of the parent assembly
    (empty for top level). Neither is enforced as a foreign key: dangling
    references and cycles are representable.

    ``industry``, ``model``, ``item_type``, ``item_name`` and ``unit`` are a
    snapshot copied from the item when its code is selected.
    """

    line_no: int = 0
    industry: str = ""
    model: str = ""
    item_type: str = DEFAULT_ITEM_TYPE
    level: int = 1

    parent_code: str = ""
    electronic_code: str = ""
    item_name: str = ""

    quantity: Decimal = field(default_factory=lambda: Decimal('0'))
    unit: str = DEFAULT_UNIT
    process: str = ""
    note: str = ""
    author: str = ""

    @classmethod
    def from_data(cls, data: Mapping[str, Any], **overrides: Any) -> "BomLine":
        values = {k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None}
        values.update(overrides)
        for name in NUMERIC_FIELDS:
            if name in values:
                values[name] = _coerce_value(name, values[name], values.get('line_no'))
                if values[name] is None:
                    del values[name]
        line = cls(**values)
        line.parent_code = line.parent_code or ""
        line.item_type = line.item_type or DEFAULT_ITEM_TYPE
        line.unit = line.unit or DEFAULT_UNIT
        line.level = line.level or 1
        return line

    @property
    def is_top_level(self) -> bool:
        return not self.parent_code

    def apply_changes(self, changes: Mapping[str, Any]) -> Set[str]:
        """Apply field edits; returns the names of fields that changed."""
        changed: Set[str] = set()
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                continue
            if name == 'parent_code':
                value = value or ""
            elif name in NUMERIC_FIELDS:
                value = _coerce_value(name, value, self.line_no or self.id)
                if value is None:
                    continue
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.add(name)
        return changed

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

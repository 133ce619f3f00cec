"""
BOM Domain - Line Linker.

Manages the item reference and the parent link of BOM lines. Display
fields are copied from the catalog at selection time and never refreshed
afterwards (copy-on-select, no propagation).
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Iterable, Optional, Union

from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import ItemType, industry_label

from .entities import BomLine


Catalog = Union[Iterable[Any], Mapping[str, Any]]

REQUIRED_FIELDS = ('electronic_code', 'item_name')


def find_in_catalog(code: str, catalog: Catalog) -> Optional[Any]:
    """Exact electronic-code match, or ``None``."""
    if isinstance(catalog, Mapping):
        return catalog.get(code)
    for item in catalog:
        if item.electronic_code == code:
            return item
    return None


def attach_code(line: BomLine, code: str, catalog: Catalog) -> BomLine:
    """
    Point ``line`` at the item with electronic code ``code``.

    On a hit, returns a copy of the line with the code, name, unit, item
    type, model and expanded industry label taken from the item. On a miss
    the very same ``line`` object is returned: a lookup miss is not an error.
    """
    item = find_in_catalog(code, catalog)
    if item is None:
        return line
    return replace(
        line,
        electronic_code=item.electronic_code,
        item_name=item.item_name,
        unit=item.unit,
        item_type=item.item_type,
        model=item.model,
        industry=industry_label(item.industry_code),
    )


def attach_parent(line: BomLine, parent_code: Optional[str]) -> BomLine:
    """Set the parent code. Any string is accepted, including dangling codes and cycles."""
    return replace(line, parent_code=parent_code or "")


def validate_for_save(line: BomLine) -> None:
    """Raise ValidationException when the code or item name is empty or the item type is unknown."""
    for name in REQUIRED_FIELDS:
        value = getattr(line, name)
        if not value or not str(value).strip():
            raise ValidationException.missing(name, record=line.line_no or line.id)
    if line.item_type not in ItemType.values():
        raise ValidationException.not_allowed('item_type', line.item_type, record=line.line_no or line.id)

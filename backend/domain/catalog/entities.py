"""
Catalog Domain - Entities.

CatalogItem is a registered part (전산코드 품목) with its classification
metadata and derived electronic code.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Set

from domain.shared.base_entity import VersionedEntity
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import (
    DEFAULT_ITEM_TYPE,
    DEFAULT_REVISION,
    DEFAULT_STATUS,
    DEFAULT_UNIT,
    REVISIONS,
    Division,
    IndustryCode,
    ItemStatus,
    ItemType,
    PartGroup,
    as_int,
)

from .codes import CODE_FIELDS, derive_code


REQUIRED_FIELDS = ('item_name', 'division', 'industry_code', 'part_group')

# Allowed values of the enumerated fields
CHOICE_FIELDS = {
    'division': Division.values(),
    'industry_code': IndustryCode.values(),
    'part_group': PartGroup.values(),
    'revision': REVISIONS,
    'item_type': ItemType.values(),
    'status': ItemStatus.values(),
}

# Fields a caller may change; identity, audit and derived fields are excluded
EDITABLE_FIELDS = (
    'sequence_no', 'division', 'industry_code', 'part_group', 'revision',
    'item_name', 'item_type', 'status', 'unit',
    'model', 'account_code', 'note', 'author',
)


@dataclass(eq=False)
class CatalogItem(VersionedEntity):
    """
    A part registered in the code registry.

    ``electronic_code`` is derived from the classification fields and is
    kept consistent by :meth:`rederive` / :meth:`apply_changes`.
    """

    sequence_no: Optional[int] = None
    division: str = ""
    industry_code: str = ""
    part_group: str = ""
    revision: str = DEFAULT_REVISION
    electronic_code: str = ""

    item_name: str = ""
    item_type: str = DEFAULT_ITEM_TYPE
    status: str = DEFAULT_STATUS
    unit: str = DEFAULT_UNIT
    model: str = ""
    account_code: str = ""
    note: str = ""
    author: str = ""
    registered_at: Optional[datetime] = None

    @classmethod
    def from_data(cls, data: Mapping[str, Any], **overrides: Any) -> "CatalogItem":
        """Build an item from loosely typed input, applying field defaults."""
        values = {k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None}
        values.update(overrides)
        if 'sequence_no' in values:
            values['sequence_no'] = as_int(values['sequence_no'], 'sequence_no')
        item = cls(**values)
        item.revision = item.revision or DEFAULT_REVISION
        item.item_type = item.item_type or DEFAULT_ITEM_TYPE
        item.status = item.status or DEFAULT_STATUS
        item.unit = item.unit or DEFAULT_UNIT
        return item

    @property
    def identifier(self) -> Any:
        return self.sequence_no if self.sequence_no is not None else self.id

    @property
    def has_code_fields(self) -> bool:
        return all([self.division, self.industry_code, self.part_group, self.sequence_no is not None])

    def derived_code(self) -> str:
        return derive_code(
            self.division,
            self.industry_code,
            self.part_group,
            self.sequence_no,
            self.revision,
        )

    def rederive(self) -> str:
        """Recompute and store the electronic code."""
        if self.has_code_fields:
            self.electronic_code = self.derived_code()
        return self.electronic_code

    def apply_changes(self, changes: Mapping[str, Any]) -> Set[str]:
        """
        Apply field edits and re-derive the code when a code field changed.

        Unknown and non-editable keys (including ``electronic_code``) are
        ignored. Returns the names of fields whose value actually changed.
        """
        changed: Set[str] = set()
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                continue
            if name == 'sequence_no':
                value = as_int(value, name, record=self.identifier)
                if value is None:
                    continue
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.add(name)
        if changed & set(CODE_FIELDS):
            previous = self.electronic_code
            self.revision = self.revision or DEFAULT_REVISION
            if self.rederive() != previous:
                changed.add('electronic_code')
        return changed

    def validate(self) -> None:
        """
        Raise ValidationException for the first empty required field, then
        for the first value outside its enumeration.
        """
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationException.missing(name, record=self.identifier)
        if self.sequence_no is not None and self.sequence_no < 1:
            raise ValidationException.not_allowed('sequence_no', self.sequence_no, record=self.identifier)
        for name, allowed in CHOICE_FIELDS.items():
            value = getattr(self, name)
            if value not in allowed:
                raise ValidationException.not_allowed(name, value, record=self.identifier)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

"""
Bulk operation results.

Bulk imports and deletes are best-effort: every row is attempted on its
own and failures are collected instead of aborting the batch.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional

from domain.shared.exceptions import DomainException


@dataclass(frozen=True)
class RowError:
    row: Any
    error: str
    message: str
    field: Optional[str] = None

    @classmethod
    def from_exception(cls, row: Any, exc: DomainException) -> "RowError":
        return cls(
            row=row,
            error=exc.code.lower(),
            message=exc.message,
            field=exc.details.get('field'),
        )

    def to_dict(self) -> dict:
        return {
            'row': self.row,
            'error': self.error,
            'message': self.message,
            'field': self.field,
        }


@dataclass
class BulkResult:
    succeeded: List[Any] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            'succeeded': [str(s) for s in self.succeeded],
            'succeeded_count': len(self.succeeded),
            'errors': [e.to_dict() for e in self.errors],
            'errors_count': len(self.errors),
        }

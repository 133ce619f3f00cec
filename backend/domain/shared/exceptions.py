"""
Domain Exceptions.

Custom exceptions for domain-level errors.
These exceptions represent business rule violations.
"""

from typing import Optional, Any, Dict


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            message=f"{entity_type} with id '{entity_id}' not found",
            code="ENTITY_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)}
        )


class EntityAlreadyExistsException(DomainException):
    """Raised when trying to create an entity that already exists."""

    def __init__(self, entity_type: str, identifier: Any):
        super().__init__(
            message=f"{entity_type} with identifier '{identifier}' already exists",
            code="ENTITY_ALREADY_EXISTS",
            details={"entity_type": entity_type, "identifier": str(identifier)}
        )


class DuplicateKeyException(EntityAlreadyExistsException):
    """
    Raised by the persistence layer when a unique key collides.

    For items the colliding field is either ``sequence_no`` or
    ``electronic_code``. Callers surface it as a conflict; only the
    sequencing policy may recompute and retry.
    """

    def __init__(self, entity_type: str, field: str, value: Any):
        super().__init__(entity_type, value)
        self.code = "DUPLICATE_KEY"
        self.field = field
        self.value = value
        self.message = f"중복된 {FIELD_LABELS.get(field, field)} 값이 존재합니다: {value}"
        self.args = (self.message,)
        self.details["field"] = field


class ValidationException(DomainException):
    """Raised when validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        record: Any = None,
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value) if value is not None else None,
                "record": str(record) if record is not None else None,
            }
        )
        self.field = field
        self.record = record

    @classmethod
    def missing(cls, field: str, record: Any = None) -> "ValidationException":
        """Build the error for an empty required field of ``record``."""
        label = FIELD_LABELS.get(field, field)
        where = f"행 {record}: " if record is not None else ""
        return cls(f"{where}{label}({field})은(는) 필수 입력 항목입니다.", field=field, record=record)

    @classmethod
    def not_allowed(cls, field: str, value: Any, record: Any = None) -> "ValidationException":
        """Build the error for a value outside the allowed set of ``field``."""
        label = FIELD_LABELS.get(field, field)
        where = f"행 {record}: " if record is not None else ""
        return cls(f"{where}{label}({field}) 값이 올바르지 않습니다: {value}", field=field, value=value, record=record)


class ConcurrencyException(DomainException):
    """Raised when optimistic locking fails due to concurrent modification."""

    def __init__(self, entity_type: str, entity_id: Any, expected_version: int):
        super().__init__(
            message=f"{entity_type} '{entity_id}' was modified by another user",
            code="CONCURRENCY_ERROR",
            details={
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "expected_version": expected_version
            }
        )


# Korean labels used in user-facing messages
FIELD_LABELS: Dict[str, str] = {
    "sequence_no": "NO",
    "electronic_code": "전산코드",
    "division": "대분류",
    "industry_code": "산업군",
    "part_group": "부품군",
    "revision": "리비전",
    "item_name": "품목명",
    "item_type": "품목유형",
    "status": "양산/개발",
    "unit": "단위",
    "line_no": "NO",
    "parent_code": "상위코드",
    "level": "레벨",
    "quantity": "수량",
}

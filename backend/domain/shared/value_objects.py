"""
Shared Value Objects used across multiple domains.

Classification enumerations for electronic-code items. Every enum exposes
``choices()`` so the persistence and presentation layers can reuse the same
catalog instead of repeating it.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation
from enum import Enum
from string import ascii_uppercase
from typing import List, Optional, Tuple

from .exceptions import ValidationException


# =============================================================================
# ENUMERATIONS
# =============================================================================

class LabeledEnum(str, Enum):
    """String enum with a human-readable label per member."""

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def choices(cls) -> List[Tuple[str, str]]:
        return [(member.value, member.label) for member in cls]

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class Division(LabeledEnum):
    """대분류 (top-level division)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class IndustryCode(LabeledEnum):
    """산업군 (industry)."""

    ELECTRIC_VEHICLE = "E"
    HYDROGEN = "H"
    IT = "I"

    @property
    def label(self) -> str:
        return INDUSTRY_LABELS[self.value]


INDUSTRY_LABELS = {
    "E": "E 전기차",
    "H": "H 수소",
    "I": "I IT",
}


class PartGroup(LabeledEnum):
    """부품군 (part group catalog)."""

    S_CAN = "A00"
    BUSBAR = "B00"
    CONNECTOR = "C00"
    DUMMY_PLATE = "D00"
    END_PLATE = "E00"
    FOLDABLE = "F00"
    SLIDABLE = "G00"
    ROLLABLE = "R00"
    POROUS_PLATE = "P00"
    SIDE_PLATE = "S00"
    TAB = "T00"
    CELL = "U00"
    BP = "V00"
    OTHER = "X00"

    @property
    def label(self) -> str:
        return f"{self.value} {PART_GROUP_NAMES[self.value]}"


PART_GROUP_NAMES = {
    "A00": "S/Can",
    "B00": "Busbar",
    "C00": "Connector",
    "D00": "DummyPlate",
    "E00": "EndPlate",
    "F00": "Foldable",
    "G00": "Slidable",
    "R00": "Rollable",
    "P00": "PorousPlate",
    "S00": "SidePlate",
    "T00": "Tab",
    "U00": "Cell",
    "V00": "BP",
    "X00": "기타",
}


class ItemType(LabeledEnum):
    """품목유형."""

    PRODUCT = "제품"
    MERCHANDISE = "상품"
    SEMI_FINISHED = "반제품"
    RAW_MATERIAL = "원자재"
    SUB_MATERIAL = "부자재"


class ItemStatus(LabeledEnum):
    """양산/개발."""

    MASS_PRODUCTION = "양산"
    DEVELOPMENT = "개발"


REVISIONS: List[str] = list(ascii_uppercase)

DEFAULT_REVISION = "A"
DEFAULT_UNIT = "EA"
DEFAULT_ITEM_TYPE = ItemType.PRODUCT.value
DEFAULT_STATUS = ItemStatus.MASS_PRODUCTION.value


def revision_choices() -> List[Tuple[str, str]]:
    return [(letter, letter) for letter in REVISIONS]


# =============================================================================
# INDUSTRY LABELS
# =============================================================================

def industry_label(code: Optional[str]) -> str:
    """
    Expand a single-letter industry code into its display label.

    ``E`` -> ``E 전기차``, ``H`` -> ``H 수소``, ``I`` -> ``I IT``;
    any other value passes through unchanged.
    """
    if code is None:
        return ""
    return INDUSTRY_LABELS.get(code, code)


def industry_code_from_label(value: Optional[str]) -> str:
    """Inverse of :func:`industry_label` for spreadsheet imports."""
    if not value:
        return ""
    text = str(value).strip()
    for code, label in INDUSTRY_LABELS.items():
        if text == label:
            return code
    return text


# =============================================================================
# COERCION
# =============================================================================

def as_int(value, field: str, record=None) -> Optional[int]:
    """Integer from loosely typed input (spreadsheet cells, JSON); blank is ``None``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationException(f"{field}: 정수가 아닙니다 ({value})", field=field, value=value, record=record)
    if not number.is_finite() or number != number.to_integral_value():
        raise ValidationException(f"{field}: 정수가 아닙니다 ({value})", field=field, value=value, record=record)
    return int(number)


def as_decimal(value, field: str, record=None) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationException(f"{field}: 숫자가 아닙니다 ({value})", field=field, value=value, record=record)
    if not number.is_finite():
        raise ValidationException(f"{field}: 숫자가 아닙니다 ({value})", field=field, value=value, record=record)
    return number

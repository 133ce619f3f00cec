"""
Catalog Domain - Electronic Code Generation.

The electronic code (전산코드) is never entered by hand; it is derived from
the classification fields of an item:

    {division}-{industry_code}-{part_group}-{sequence_no:05d}{revision}

e.g. ``A-E-A00-00001A``. Sequence numbers of 100000 and above simply grow
past the five-digit padding.
"""

from __future__ import annotations
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from domain.shared.value_objects import DEFAULT_REVISION

SEQUENCE_WIDTH = 5

# Fields whose change invalidates a stored electronic code
CODE_FIELDS = ('division', 'industry_code', 'part_group', 'sequence_no', 'revision')

CODE_PATTERN = re.compile(
    r'^(?P<division>[^-]+)-(?P<industry_code>[^-]+)-(?P<part_group>[^-]+)-'
    r'(?P<sequence_no>\d+)(?P<revision>[A-Za-z]?)$'
)


def derive_code(
    division: str,
    industry_code: str,
    part_group: str,
    sequence_no: int,
    revision: Optional[str] = None,
) -> str:
    """Build the canonical electronic code. Pure function."""
    number = str(int(sequence_no)).zfill(SEQUENCE_WIDTH)
    return f"{division}-{industry_code}-{part_group}-{number}{revision or DEFAULT_REVISION}"


def next_sequence_no(existing_max: Optional[int]) -> int:
    """
    Next sequence number after ``existing_max``.

    ``None`` (no records yet) yields 1. Callers must pass the current
    persisted maximum, not a cached one.
    """
    return (existing_max or 0) + 1


def next_sequence_no_for(records: Iterable[Any]) -> int:
    """Next sequence number for a collection of records (mappings or objects)."""
    numbers = [n for n in (_sequence_of(r) for r in records) if n is not None]
    return next_sequence_no(max(numbers) if numbers else None)


def _sequence_of(record: Any) -> Optional[int]:
    if isinstance(record, Mapping):
        value = record.get('sequence_no', record.get('sequenceNo'))
    else:
        value = getattr(record, 'sequence_no', None)
    return int(value) if value is not None else None


@dataclass(frozen=True)
class CodeParts:
    division: str
    industry_code: str
    part_group: str
    sequence_no: int
    revision: str


def parse_code(code: str) -> Optional[CodeParts]:
    """Split an electronic code into its parts; ``None`` when it does not match."""
    match = CODE_PATTERN.match((code or '').strip())
    if not match:
        return None
    return CodeParts(
        division=match['division'],
        industry_code=match['industry_code'],
        part_group=match['part_group'],
        sequence_no=int(match['sequence_no']),
        revision=match['revision'] or DEFAULT_REVISION,
    )

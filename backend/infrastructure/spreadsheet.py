"""
Spreadsheet codec.

Converts between ``.xlsx`` workbooks and lists of row dicts keyed by the
header row. Used by the bulk import and export endpoints.
"""

import io
import logging
from zipfile import BadZipFile
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import UUID

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.styles import Font

from domain.catalog.codes import parse_code
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import industry_code_from_label

logger = logging.getLogger(__name__)


DEFAULT_SHEET_TITLE = "Sheet1"


# =============================================================================
# Column aliases (labels of exported sheets -> field names)
# =============================================================================

ITEM_COLUMN_ALIASES: Dict[str, str] = {
    'NO': 'sequence_no',
    '전산코드': 'electronic_code',
    '대분류': 'division',
    '산업군': 'industry_code',
    '부품군': 'part_group',
    '리비전': 'revision',
    '품목명': 'item_name',
    '품목유형': 'item_type',
    '양산/개발': 'status',
    '단위': 'unit',
    '모델': 'model',
    '회계코드': 'account_code',
    '비고': 'note',
    '작성자': 'author',
    '등록일시': 'registered_at',
}

BOM_COLUMN_ALIASES: Dict[str, str] = {
    'NO': 'line_no',
    '산업군': 'industry',
    '모델': 'model',
    '품목유형': 'item_type',
    '레벨': 'level',
    '상위코드': 'parent_code',
    '전산코드': 'electronic_code',
    '품목명': 'item_name',
    '수량': 'quantity',
    '단위': 'unit',
    '공정': 'process',
    '비고': 'note',
    '작성자': 'author',
}


def _cell_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.replace(tzinfo=None)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def decode(file_obj) -> List[Dict[str, Any]]:
    """
    Read the first worksheet of an ``.xlsx`` file into row dicts.

    The first row supplies the keys. Completely empty rows are skipped and
    short rows are padded with ``None``.
    """
    try:
        wb = load_workbook(filename=file_obj, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, OSError) as exc:
        raise ValidationException(f"엑셀 파일을 읽을 수 없습니다: {exc}", field="file")
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        header_row = next(rows, None)
        if header_row is None:
            return []
        headers = [str(h).strip() if h is not None else '' for h in header_row]
        while headers and headers[-1] == '':
            headers.pop()

        records: List[Dict[str, Any]] = []
        for values in rows:
            values = list(values or [])[:len(headers)]
            if all(_is_blank(v) for v in values):
                continue
            while len(values) < len(headers):
                values.append(None)
            records.append({h: v for h, v in zip(headers, values) if h})
    finally:
        wb.close()

    logger.debug(f"Decoded {len(records)} spreadsheet rows ({len(headers)} columns)")
    return records


def encode(
    rows: Iterable[Mapping[str, Any]],
    headers: Optional[Sequence[str]] = None,
    sheet_title: str = DEFAULT_SHEET_TITLE,
) -> bytes:
    """
    Write row dicts into a single-sheet workbook and return its bytes.

    ``headers`` fixes the column order; by default every key is used in
    first-seen order.
    """
    rows = list(rows)
    if headers is None:
        headers = []
        for row in rows:
            for key in row:
                if key not in headers:
                    headers.append(key)

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    header_font = Font(bold=True)
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font

    for row_idx, row in enumerate(rows, 2):
        for col, header in enumerate(headers, 1):
            ws.cell(row=row_idx, column=col, value=_cell_value(row.get(header)))

    # Auto-width columns
    for column in ws.columns:
        max_length = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[column[0].column_letter].width = max_length + 2

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    aliases: Mapping[str, str],
) -> List[Dict[str, Any]]:
    """
    Rename labelled columns to field names and drop unknown columns.

    Keys that already are field names are kept as they are. Blank strings
    become ``None`` and industry labels such as ``"E 전기차"`` become codes.
    """
    known = set(aliases.values())
    normalized = []
    for row in rows:
        record: Dict[str, Any] = {}
        for key, value in row.items():
            name = aliases.get(key, key)
            if name not in known:
                continue
            if isinstance(value, str):
                value = value.strip() or None
            if name == 'industry_code' and value is not None:
                value = industry_code_from_label(value)
            record[name] = value
        normalized.append(record)
    return normalized


def fill_code_parts(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Fill missing classification fields of item rows from their ``electronic_code``.

    Rows carrying only a code column (as in older exports) can be imported
    without retyping division, industry, part group and revision. Values
    present in the row win over the parsed ones.
    """
    filled = []
    for row in rows:
        parts = parse_code(row.get('electronic_code') or '')
        if parts is not None:
            for name in ('division', 'industry_code', 'part_group', 'sequence_no', 'revision'):
                if row.get(name) is None:
                    row[name] = getattr(parts, name)
        filled.append(row)
    return filled

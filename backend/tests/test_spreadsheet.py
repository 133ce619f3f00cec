"""
Spreadsheet codec.
"""

import io
from decimal import Decimal
from uuid import UUID

import pytest
from openpyxl import Workbook, load_workbook

from domain.shared.exceptions import ValidationException
from infrastructure import spreadsheet


def test_round_trip_of_primitive_rows():
    rows = [
        {'sequence_no': 1, 'item_name': 'Can', 'unit': 'EA', 'note': None},
        {'sequence_no': 2, 'item_name': 'Busbar', 'unit': 'SET', 'note': 'rev B'},
    ]
    assert spreadsheet.decode(io.BytesIO(spreadsheet.encode(rows))) == rows


def test_encode_converts_rich_values():
    ident = UUID('12345678-1234-5678-1234-567812345678')
    content = spreadsheet.encode([{'id': ident, 'quantity': Decimal('2.5')}])

    decoded = spreadsheet.decode(io.BytesIO(content))

    assert decoded == [{'id': str(ident), 'quantity': 2.5}]


def test_encode_writes_bold_header_in_given_order():
    content = spreadsheet.encode([{'b': 1, 'a': 2}], headers=['a', 'b'], sheet_title='BOM')
    ws = load_workbook(io.BytesIO(content)).active

    assert ws.title == 'BOM'
    assert [c.value for c in ws[1]] == ['a', 'b']
    assert ws['A1'].font.bold


def test_decode_skips_empty_rows_and_pads_short_ones():
    wb = Workbook()
    ws = wb.active
    ws.append(['NO', '품목명', '비고'])
    ws.append([1, 'Can'])
    ws.append([None, None, None])
    ws.append([2, 'Tab', 'x'])
    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)

    rows = spreadsheet.decode(buffer)

    assert rows == [
        {'NO': 1, '품목명': 'Can', '비고': None},
        {'NO': 2, '품목명': 'Tab', '비고': 'x'},
    ]


def test_decode_rejects_non_workbook():
    with pytest.raises(ValidationException) as exc_info:
        spreadsheet.decode(io.BytesIO(b'not a spreadsheet'))
    assert exc_info.value.field == 'file'


def test_normalize_rows_maps_labels():
    rows = [{'전산코드': 'A-E-A00-00001A', '산업군': 'E 전기차', '품목명': ' Can ', '기타열': 'x', '비고': ''}]

    normalized = spreadsheet.normalize_rows(rows, spreadsheet.ITEM_COLUMN_ALIASES)

    assert normalized == [{
        'electronic_code': 'A-E-A00-00001A',
        'industry_code': 'E',
        'item_name': 'Can',
        'note': None,
    }]


def test_fill_code_parts_from_code_column():
    rows = [{'electronic_code': 'B-H-T00-00031C', 'item_name': 'Tab', 'revision': None}]

    filled = spreadsheet.fill_code_parts(rows)

    assert filled[0]['division'] == 'B'
    assert filled[0]['industry_code'] == 'H'
    assert filled[0]['part_group'] == 'T00'
    assert filled[0]['sequence_no'] == 31
    assert filled[0]['revision'] == 'C'

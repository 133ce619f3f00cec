"""
BOM line linking: copy-on-select and save validation.
"""

from decimal import Decimal

import pytest

from domain.bom.entities import BomLine
from domain.bom.linker import attach_code, attach_parent, validate_for_save
from domain.catalog.entities import CatalogItem
from domain.shared.exceptions import ValidationException


@pytest.fixture
def catalog():
    items = []
    for seq, industry in ((1, 'E'), (2, 'H'), (3, 'I')):
        item = CatalogItem.from_data({
            'sequence_no': seq, 'division': 'A', 'industry_code': industry,
            'part_group': 'C00', 'item_name': f'Connector {seq}',
            'unit': 'SET', 'item_type': '반제품', 'model': f'M{seq}',
        })
        item.rederive()
        items.append(item)
    return items


class TestAttachCode:

    def test_hit_copies_item_fields(self, catalog):
        line = BomLine(line_no=1, quantity=Decimal('2'))
        linked = attach_code(line, 'A-E-C00-00001A', catalog)

        assert linked.electronic_code == 'A-E-C00-00001A'
        assert linked.item_name == 'Connector 1'
        assert linked.unit == 'SET'
        assert linked.item_type == '반제품'
        assert linked.model == 'M1'
        assert linked.industry == 'E 전기차'
        assert linked.quantity == Decimal('2')

    def test_hit_returns_a_copy(self, catalog):
        line = BomLine(line_no=1)
        linked = attach_code(line, 'A-E-C00-00001A', catalog)
        assert linked is not line
        assert line.electronic_code == ''

    @pytest.mark.parametrize('code, label', [
        ('A-H-C00-00002A', 'H 수소'),
        ('A-I-C00-00003A', 'I IT'),
    ])
    def test_industry_label(self, catalog, code, label):
        assert attach_code(BomLine(), code, catalog).industry == label

    def test_accepts_mapping_catalog(self, catalog):
        by_code = {item.electronic_code: item for item in catalog}
        linked = attach_code(BomLine(), 'A-H-C00-00002A', by_code)
        assert linked.item_name == 'Connector 2'

    def test_miss_returns_line_unchanged(self, catalog):
        line = BomLine(line_no=4, electronic_code='OLD', item_name='old name')
        result = attach_code(line, 'Z-Z-Z00-99999A', catalog)
        assert result is line
        assert result.electronic_code == 'OLD'
        assert result.item_name == 'old name'


class TestAttachParent:

    def test_sets_any_code(self):
        line = BomLine(electronic_code='CHILD')
        assert attach_parent(line, 'NOWHERE').parent_code == 'NOWHERE'

    def test_allows_self_reference(self):
        line = BomLine(electronic_code='LOOP')
        assert attach_parent(line, 'LOOP').parent_code == 'LOOP'

    def test_none_means_top_level(self):
        line = BomLine(parent_code='P')
        assert attach_parent(line, None).is_top_level


class TestValidateForSave:

    def test_complete_line_passes(self):
        validate_for_save(BomLine(line_no=1, electronic_code='C', item_name='n', parent_code='ghost'))

    @pytest.mark.parametrize('field', ['electronic_code', 'item_name'])
    def test_missing_field(self, field):
        data = {'line_no': 9, 'electronic_code': 'C', 'item_name': 'n', field: ''}
        with pytest.raises(ValidationException) as exc_info:
            validate_for_save(BomLine(**data))
        assert exc_info.value.field == field
        assert exc_info.value.record == 9

    def test_unknown_item_type(self):
        line = BomLine(line_no=4, electronic_code='C', item_name='n', item_type='foo')
        with pytest.raises(ValidationException) as exc_info:
            validate_for_save(line)
        assert exc_info.value.field == 'item_type'


class TestBomLineEntity:

    def test_from_data_coerces_numbers(self):
        line = BomLine.from_data({'line_no': '3', 'level': 2.0, 'quantity': '1.5'})
        assert line.line_no == 3
        assert line.level == 2
        assert line.quantity == Decimal('1.5')

    def test_level_below_one_rejected(self):
        with pytest.raises(ValidationException):
            BomLine.from_data({'level': 0})

    @pytest.mark.parametrize('line_no', [0, '-1'])
    def test_explicit_line_no_below_one_rejected(self, line_no):
        with pytest.raises(ValidationException) as exc_info:
            BomLine.from_data({'line_no': line_no})
        assert exc_info.value.field == 'line_no'

    def test_blank_numbers_use_defaults(self):
        line = BomLine.from_data({'line_no': '', 'level': None, 'quantity': ''})
        assert line.line_no == 0
        assert line.level == 1
        assert line.quantity == Decimal('0')

"""
Django-backed repositories.
"""

from unittest import mock
from uuid import uuid4

import pytest
from django.db import DataError, IntegrityError

from domain.bom.entities import BomLine
from domain.catalog.entities import CatalogItem
from domain.shared.exceptions import (
    ConcurrencyException,
    DuplicateKeyException,
    EntityNotFoundException,
    ValidationException,
)
from infrastructure.persistence.models import BomLine as BomLineRow, Item
from infrastructure.persistence.repositories import (
    DjangoBomLineRepository,
    DjangoItemRepository,
)

pytestmark = pytest.mark.django_db


def make_item(sequence_no, **fields):
    values = {
        'division': 'A', 'industry_code': 'E', 'part_group': 'A00',
        'item_name': f'item {sequence_no}',
    }
    values.update(fields)
    item = CatalogItem.from_data(values, sequence_no=sequence_no)
    item.rederive()
    return item


class TestItemRepository:

    def test_create_stores_derived_code(self):
        repo = DjangoItemRepository()

        created = repo.create(make_item(12, revision='B'))

        assert created.version == 1
        assert Item.objects.get(pk=created.id).electronic_code == 'A-E-A00-00012B'

    def test_duplicate_sequence_no(self):
        repo = DjangoItemRepository()
        repo.create(make_item(1))

        with pytest.raises(DuplicateKeyException) as exc_info:
            repo.create(make_item(1, division='B'))

        assert exc_info.value.field == 'sequence_no'
        assert Item.objects.count() == 1

    def test_duplicate_code_from_another_sequence(self):
        repo = DjangoItemRepository()
        repo.create(make_item(1))
        clash = make_item(2)
        clash.electronic_code = 'A-E-A00-00001A'

        with mock.patch.object(Item, 'save', autospec=True, side_effect=IntegrityError('unique')):
            with pytest.raises(DuplicateKeyException) as exc_info:
                repo.create(clash)

        assert exc_info.value.field == 'electronic_code'

    def test_other_integrity_errors_propagate(self):
        repo = DjangoItemRepository()
        item = CatalogItem.from_data(
            {'division': 'A', 'industry_code': 'E', 'part_group': 'A00', 'item_name': 'x'},
            sequence_no=-5,
        )
        item.rederive()

        with pytest.raises(IntegrityError):
            repo.create(item)

        assert not Item.objects.exists()

    def test_value_too_long_is_a_validation_error(self):
        repo = DjangoItemRepository()

        with mock.patch.object(Item, 'save', autospec=True, side_effect=DataError('value too long')):
            with pytest.raises(ValidationException):
                repo.create(make_item(1))

    def test_history_records_change_reason(self):
        repo = DjangoItemRepository()
        item = repo.create(make_item(1))
        item.apply_changes({'item_name': 'renamed', 'unit': 'SET'})
        repo.update_by_id(item.id, item)

        reasons = list(Item.objects.get(pk=item.id).history.values_list('history_change_reason', flat=True))

        assert reasons == ['수정: item_name, unit', '등록']

    def test_max_sequence_and_last_code(self):
        repo = DjangoItemRepository()
        assert repo.max_sequence_no() is None
        assert repo.last_code() is None

        repo.create(make_item(3, division='C'))
        repo.create(make_item(9))

        assert repo.max_sequence_no() == 9
        assert repo.last_code() == 'C-E-A00-00003A'

    def test_update_increments_version(self):
        repo = DjangoItemRepository()
        item = repo.create(make_item(1))
        item.apply_changes({'item_name': 'renamed'})

        updated = repo.update_by_id(item.id, item, expected_version=1)

        assert updated.version == 2
        assert updated.item_name == 'renamed'

    def test_update_with_stale_version(self):
        repo = DjangoItemRepository()
        item = repo.create(make_item(1))
        repo.update_by_id(item.id, item)

        with pytest.raises(ConcurrencyException):
            repo.update_by_id(item.id, item, expected_version=1)

    def test_find_by_code(self):
        repo = DjangoItemRepository()
        repo.create(make_item(5))

        assert repo.find_by_code('A-E-A00-00005A').sequence_no == 5
        assert repo.find_by_code('A-E-A00-00006A') is None
        assert repo.find_by_code('') is None

    @pytest.mark.parametrize('item_id', [uuid4(), 'not-a-uuid'])
    def test_missing_item(self, item_id):
        repo = DjangoItemRepository()
        with pytest.raises(EntityNotFoundException):
            repo.get(item_id)
        with pytest.raises(EntityNotFoundException):
            repo.delete_by_id(item_id)

    def test_delete_all(self):
        repo = DjangoItemRepository()
        repo.create_many([make_item(1), make_item(2)])

        assert repo.delete_all() == 2
        assert repo.list() == []


class TestBomLineRepository:

    def test_list_filters_and_orders_by_line_no(self):
        repo = DjangoBomLineRepository()
        repo.create(BomLine.from_data({'line_no': 2, 'electronic_code': 'B', 'item_name': 'b', 'parent_code': 'A'}))
        repo.create(BomLine.from_data({'line_no': 1, 'electronic_code': 'A', 'item_name': 'a'}))

        assert [line.electronic_code for line in repo.list()] == ['A', 'B']
        assert [line.electronic_code for line in repo.list({'parent_code': 'A'})] == ['B']
        assert repo.max_line_no() == 2

    def test_parent_code_is_not_a_foreign_key(self):
        repo = DjangoBomLineRepository()
        line = repo.create(BomLine.from_data({
            'electronic_code': 'C', 'item_name': 'c', 'parent_code': 'NOWHERE',
        }))

        assert repo.get(line.id).parent_code == 'NOWHERE'

    def test_value_too_long_is_a_validation_error(self):
        repo = DjangoBomLineRepository()
        line = BomLine.from_data({'electronic_code': 'C', 'item_name': 'c'})

        with mock.patch.object(BomLineRow, 'save', autospec=True, side_effect=DataError('value too long')):
            with pytest.raises(ValidationException):
                repo.create(line)

"""
Registry use cases over in-memory repositories.
"""

from decimal import Decimal
from unittest import mock
from uuid import uuid4

import pytest

from application.services import BomRegistry, ItemRegistry
from domain.catalog.repositories import ItemRepository
from domain.shared.exceptions import (
    ConcurrencyException,
    DuplicateKeyException,
    EntityNotFoundException,
    ValidationException,
)

from .conftest import InMemoryItemRepository


class StaleMaxRepository(InMemoryItemRepository):
    """Reports an outdated maximum ``stale_reads`` times, like a lagging snapshot."""

    def __init__(self, stale_reads):
        super().__init__()
        self.stale_reads = stale_reads

    def max_sequence_no(self):
        if self.stale_reads > 0:
            self.stale_reads -= 1
            return None
        return super().max_sequence_no()


# =============================================================================
# ItemRegistry
# =============================================================================

class TestItemRegistryCreate:

    def test_assigns_consecutive_sequence_numbers(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        first = registry.create(item_data)
        second = registry.create(item_data)

        assert (first.sequence_no, second.sequence_no) == (1, 2)
        assert first.electronic_code == 'A-E-A00-00001A'
        assert second.electronic_code == 'A-E-A00-00002A'

    def test_missing_item_name_never_reaches_store(self, item_data):
        repository = mock.create_autospec(ItemRepository, instance=True)
        repository.max_sequence_no.return_value = None
        registry = ItemRegistry(repository)

        with pytest.raises(ValidationException) as exc_info:
            registry.create({**item_data, 'item_name': ''})

        assert exc_info.value.field == 'item_name'
        repository.create.assert_not_called()

    def test_retries_after_stale_maximum(self, item_data):
        repository = StaleMaxRepository(stale_reads=0)
        registry = ItemRegistry(repository)
        registry.create(item_data)

        repository.stale_reads = 1
        created = registry.create(item_data)

        assert created.sequence_no == 2
        assert len(repository.rows) == 2

    def test_gives_up_after_max_attempts(self, item_data):
        repository = StaleMaxRepository(stale_reads=0)
        registry = ItemRegistry(repository, max_attempts=3)
        registry.create(item_data)

        repository.stale_reads = 10
        with mock.patch.object(repository, 'create', wraps=repository.create) as create:
            with pytest.raises(DuplicateKeyException) as exc_info:
                registry.create(item_data)

        assert create.call_count == 3
        assert exc_info.value.field == 'sequence_no'
        assert len(repository.rows) == 1

    def test_explicit_sequence_conflict_is_not_retried(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        registry.create({**item_data, 'sequence_no': 5})

        with mock.patch.object(item_repository, 'create', wraps=item_repository.create) as create:
            with pytest.raises(DuplicateKeyException):
                registry.create({**item_data, 'sequence_no': 5, 'item_name': 'other'})

        assert create.call_count == 1
        assert [r.item_name for r in item_repository.rows.values()] == ['Cell Can']

    def test_preview_does_not_save(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        preview = registry.preview(item_data)
        assert preview.electronic_code == 'A-E-A00-00001A'
        assert item_repository.rows == {}


class TestItemRegistryUpdate:

    def test_division_change_recomputes_code(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        item = registry.create(item_data)

        updated = registry.update(item.id, {'division': 'D'})

        assert updated.electronic_code == 'D-E-A00-00001A'
        assert updated.version == 2

    def test_stale_version_is_rejected(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        item = registry.create(item_data)
        registry.update(item.id, {'item_name': 'first edit'})

        with pytest.raises(ConcurrencyException):
            registry.update(item.id, {'item_name': 'second edit'}, expected_version=1)

        assert registry.get(item.id).item_name == 'first edit'

    def test_unchanged_update_is_not_written(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        item = registry.create(item_data)

        with mock.patch.object(item_repository, 'update_by_id') as update_by_id:
            result = registry.update(item.id, {'item_name': 'Cell Can'})

        update_by_id.assert_not_called()
        assert result.version == 1

    def test_blanking_required_field_fails(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        item = registry.create(item_data)

        with pytest.raises(ValidationException):
            registry.update(item.id, {'part_group': ''})

        assert registry.get(item.id).part_group == 'A00'

    def test_sequence_collision_on_update(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        registry.create(item_data)
        second = registry.create(item_data)

        with pytest.raises(DuplicateKeyException):
            registry.update(second.id, {'sequence_no': 1})

    def test_missing_item(self, item_repository):
        with pytest.raises(EntityNotFoundException):
            ItemRegistry(item_repository).update(uuid4(), {'item_name': 'x'})


class TestItemRegistryBulk:

    def test_bulk_create_reports_failed_rows(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        rows = [item_data, {**item_data, 'item_name': None}, item_data]

        result = registry.bulk_create(rows, first_row=2)

        assert len(result.succeeded) == 2
        assert [(e.row, e.error, e.field) for e in result.errors] == [(3, 'validation_error', 'item_name')]
        assert not result.ok

    def test_replace_all_drops_existing_items(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        registry.create({**item_data, 'item_name': 'old'})

        result = registry.replace_all([{**item_data, 'sequence_no': 10, 'item_name': 'new'}])

        assert result.ok
        assert [(r.sequence_no, r.item_name) for r in registry.list()] == [(10, 'new')]

    def test_replace_all_keeps_catalog_when_no_row_is_valid(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        registry.create({**item_data, 'item_name': 'old'})

        with pytest.raises(ValidationException) as exc_info:
            registry.replace_all([
                {**item_data, 'division': 'Z'},
                {**item_data, 'item_name': ''},
            ])

        assert exc_info.value.field == 'division'
        assert [r.item_name for r in registry.list()] == ['old']

    def test_replace_all_with_no_rows_is_refused(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        registry.create(item_data)

        with pytest.raises(ValidationException):
            registry.replace_all([])

        assert len(registry.list()) == 1

    def test_bulk_create_rejects_values_outside_catalog(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        rows = [
            {**item_data, 'division': 'Z', 'industry_code': 'Q', 'part_group': 'ZZZ'},
            {**item_data, 'item_type': 'foo'},
            {**item_data, 'sequence_no': -5},
            item_data,
        ]

        result = registry.bulk_create(rows)

        assert [(e.row, e.field) for e in result.errors] == [
            (1, 'division'), (2, 'item_type'), (3, 'sequence_no'),
        ]
        assert [r.electronic_code for r in registry.list()] == ['A-E-A00-00001A']

    def test_bulk_delete_reports_unknown_ids(self, item_repository, item_data):
        registry = ItemRegistry(item_repository)
        item = registry.create(item_data)
        missing = uuid4()

        result = registry.bulk_delete([item.id, missing])

        assert result.succeeded == [item.id]
        assert result.errors[0].error == 'entity_not_found'
        assert item_repository.rows == {}


# =============================================================================
# BomRegistry
# =============================================================================

@pytest.fixture
def bom_registry(bom_repository, item_repository, item_data):
    ItemRegistry(item_repository).create({**item_data, 'unit': 'PCS', 'item_type': '원자재'})
    return BomRegistry(bom_repository, item_repository)


class TestBomRegistry:

    def test_create_assigns_line_numbers(self, bom_registry):
        first = bom_registry.create({'electronic_code': 'A', 'item_name': 'a'})
        second = bom_registry.create({'electronic_code': 'B', 'item_name': 'b'})
        explicit = bom_registry.create({'electronic_code': 'C', 'item_name': 'c', 'line_no': 40})

        assert (first.line_no, second.line_no, explicit.line_no) == (1, 2, 40)
        assert bom_registry.next_line_no() == 41

    def test_create_requires_code_and_name(self, bom_registry, bom_repository):
        with pytest.raises(ValidationException) as exc_info:
            bom_registry.create({'item_name': 'no code'})
        assert exc_info.value.field == 'electronic_code'
        assert bom_repository.rows == {}

    def test_attach_code_copies_item(self, bom_registry):
        line = bom_registry.create({'electronic_code': 'TMP', 'item_name': 'tmp', 'quantity': '3'})

        linked = bom_registry.attach_code(line.id, 'A-E-A00-00001A')

        assert linked.electronic_code == 'A-E-A00-00001A'
        assert linked.item_name == 'Cell Can'
        assert linked.unit == 'PCS'
        assert linked.item_type == '원자재'
        assert linked.industry == 'E 전기차'
        assert linked.quantity == Decimal('3')
        assert linked.version == 2

    def test_attach_unknown_code_is_a_no_op(self, bom_registry, bom_repository):
        line = bom_registry.create({'electronic_code': 'TMP', 'item_name': 'tmp'})

        with mock.patch.object(bom_repository, 'update_by_id') as update_by_id:
            result = bom_registry.attach_code(line.id, 'NO-SUCH-CODE')

        update_by_id.assert_not_called()
        assert result.electronic_code == 'TMP'
        assert result.version == 1

    def test_item_edit_does_not_propagate(self, bom_registry, item_repository):
        line = bom_registry.create({'electronic_code': 'TMP', 'item_name': 'tmp'})
        bom_registry.attach_code(line.id, 'A-E-A00-00001A')
        item = item_repository.find_by_code('A-E-A00-00001A')
        ItemRegistry(item_repository).update(item.id, {'item_name': 'Renamed'})

        assert bom_registry.get(line.id).item_name == 'Cell Can'

    def test_deleting_parent_leaves_dangling_child(self, bom_registry):
        parent = bom_registry.create({'electronic_code': 'ASSY', 'item_name': 'assembly'})
        child = bom_registry.create({'electronic_code': 'PART', 'item_name': 'part'})
        bom_registry.attach_parent(child.id, 'ASSY')

        bom_registry.delete(parent.id)

        remaining = bom_registry.get(child.id)
        assert remaining.parent_code == 'ASSY'
        forest = bom_registry.tree()
        assert [node.line.id for node in forest] == [child.id]
        assert forest[0].dangling_parent

    def test_update_with_stale_version(self, bom_registry):
        line = bom_registry.create({'electronic_code': 'A', 'item_name': 'a'})
        bom_registry.update(line.id, {'quantity': Decimal('2')})

        with pytest.raises(ConcurrencyException):
            bom_registry.update(line.id, {'quantity': Decimal('5')}, expected_version=1)

    def test_update_cannot_blank_item_name(self, bom_registry):
        line = bom_registry.create({'electronic_code': 'A', 'item_name': 'a'})
        with pytest.raises(ValidationException):
            bom_registry.update(line.id, {'item_name': '  '})

    def test_bulk_create_is_best_effort(self, bom_registry):
        result = bom_registry.bulk_create([
            {'electronic_code': 'A', 'item_name': 'a'},
            {'electronic_code': 'B'},
            {'electronic_code': 'C', 'item_name': 'c', 'level': 'x'},
        ])
        assert len(result.succeeded) == 1
        assert [(e.row, e.field) for e in result.errors] == [(2, 'item_name'), (3, 'level')]

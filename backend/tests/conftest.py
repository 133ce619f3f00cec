"""
Shared fixtures: in-memory repositories for registry tests and API clients.
"""

from dataclasses import replace

import pytest
from rest_framework.test import APIClient

from domain.bom.repositories import BomLineRepository
from domain.catalog.repositories import ItemRepository
from domain.shared.exceptions import (
    ConcurrencyException,
    DuplicateKeyException,
    EntityNotFoundException,
)


def _matches(record, filters):
    for key, expected in (filters or {}).items():
        name, _, lookup = key.partition('__')
        value = getattr(record, name)
        if lookup == 'icontains':
            if str(expected).lower() not in str(value).lower():
                return False
        elif lookup == 'contains':
            if str(expected) not in str(value):
                return False
        elif value != expected:
            return False
    return True


class InMemoryItemRepository(ItemRepository):

    def __init__(self):
        self.rows = {}

    def list(self, filters=None):
        rows = [replace(r) for r in self.rows.values() if _matches(r, filters)]
        return sorted(rows, key=lambda r: r.sequence_no)

    def get(self, item_id):
        if item_id not in self.rows:
            raise EntityNotFoundException('Item', item_id)
        return replace(self.rows[item_id])

    def find_by_code(self, code):
        for row in self.rows.values():
            if row.electronic_code == code:
                return replace(row)
        return None

    def max_sequence_no(self):
        return max((r.sequence_no for r in self.rows.values()), default=None)

    def last_code(self):
        return max((r.electronic_code for r in self.rows.values()), default=None)

    def _check_unique(self, item):
        for row in self.rows.values():
            if row.id == item.id:
                continue
            if row.sequence_no == item.sequence_no:
                raise DuplicateKeyException('Item', 'sequence_no', item.sequence_no)
            if row.electronic_code == item.electronic_code:
                raise DuplicateKeyException('Item', 'electronic_code', item.electronic_code)

    def create(self, item, actor=None):
        self._check_unique(item)
        self.rows[item.id] = replace(item, version=1)
        return replace(self.rows[item.id])

    def create_many(self, items, actor=None):
        return [self.create(item, actor=actor) for item in items]

    def update_by_id(self, item_id, item, expected_version=None, actor=None):
        stored = self.get(item_id)
        if expected_version is not None and stored.version != expected_version:
            raise ConcurrencyException('Item', item_id, expected_version)
        self._check_unique(item)
        self.rows[item_id] = replace(item, version=stored.version + 1)
        return replace(self.rows[item_id])

    def delete_by_id(self, item_id):
        if self.rows.pop(item_id, None) is None:
            raise EntityNotFoundException('Item', item_id)

    def delete_all(self):
        count = len(self.rows)
        self.rows.clear()
        return count


class InMemoryBomLineRepository(BomLineRepository):

    def __init__(self):
        self.rows = {}

    def list(self, filters=None):
        rows = [replace(r) for r in self.rows.values() if _matches(r, filters)]
        return sorted(rows, key=lambda r: (r.line_no, str(r.id)))

    def get(self, line_id):
        if line_id not in self.rows:
            raise EntityNotFoundException('BomLine', line_id)
        return replace(self.rows[line_id])

    def max_line_no(self):
        return max((r.line_no for r in self.rows.values()), default=None)

    def create(self, line, actor=None):
        self.rows[line.id] = replace(line, version=1)
        return replace(self.rows[line.id])

    def create_many(self, lines, actor=None):
        return [self.create(line, actor=actor) for line in lines]

    def update_by_id(self, line_id, line, expected_version=None, actor=None):
        stored = self.get(line_id)
        if expected_version is not None and stored.version != expected_version:
            raise ConcurrencyException('BomLine', line_id, expected_version)
        self.rows[line_id] = replace(line, version=stored.version + 1)
        return replace(self.rows[line_id])

    def delete_by_id(self, line_id):
        if self.rows.pop(line_id, None) is None:
            raise EntityNotFoundException('BomLine', line_id)


@pytest.fixture
def item_repository():
    return InMemoryItemRepository()


@pytest.fixture
def bom_repository():
    return InMemoryBomLineRepository()


@pytest.fixture
def item_data():
    return {
        'division': 'A',
        'industry_code': 'E',
        'part_group': 'A00',
        'item_name': 'Cell Can',
        'unit': 'EA',
        'model': 'M1',
    }


# =============================================================================
# API
# =============================================================================

@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='operator', password='pass1234!')


@pytest.fixture
def admin_user(django_user_model):
    return django_user_model.objects.create_user(
        username='manager', password='pass1234!', is_staff=True
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def anonymous_client():
    return APIClient()


@pytest.fixture
def create_item(api_client, item_data):
    def _create(**overrides):
        response = api_client.post('/api/v1/items/', {**item_data, **overrides}, format='json')
        assert response.status_code == 201, response.data
        return response.data
    return _create


@pytest.fixture
def create_line(api_client):
    def _create(**fields):
        payload = {'electronic_code': 'X', 'item_name': 'line', 'quantity': '1'}
        payload.update(fields)
        response = api_client.post('/api/v1/bom-lines/', payload, format='json')
        assert response.status_code == 201, response.data
        return response.data
    return _create

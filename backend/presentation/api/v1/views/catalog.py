"""
Catalog Views.

API views for electronic-code items (전산코드 품목).
"""

from django.conf import settings
from django_filters import rest_framework as django_filters
from rest_framework import filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from application.services import ItemRegistry
from domain.shared.value_objects import PART_GROUP_NAMES
from infrastructure import spreadsheet
from infrastructure.persistence.models import Item
from infrastructure.persistence.repositories import DjangoItemRepository

from ..serializers import (
    CodePreviewSerializer,
    ItemDetailSerializer,
    ItemListSerializer,
    ItemWriteSerializer,
)
from .base import BaseModelViewSet, BulkActionMixin, ExportMixin

def wants_replace(request):
    value = request.query_params.get('replace')
    if value is None and hasattr(request.data, 'get'):
        value = request.data.get('replace')
    return str(value).lower() in ('1', 'true', 'yes')


class ItemFilter(django_filters.FilterSet):
    """Filter for items."""

    electronic_code = django_filters.CharFilter(lookup_expr='icontains')
    item_name = django_filters.CharFilter(lookup_expr='icontains')
    model = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = Item
        fields = [
            'division', 'industry_code', 'part_group', 'item_type', 'status',
            'electronic_code', 'item_name', 'model',
        ]


class ItemViewSet(BulkActionMixin, ExportMixin, BaseModelViewSet):
    """
    ViewSet for electronic-code items.

    Codes are derived on create and whenever a classification field
    changes. Send ``version`` with an update to reject stale edits.
    """

    queryset = Item.objects.select_related('created_by', 'updated_by')
    serializer_classes = {
        'list': ItemListSerializer,
        'default': ItemDetailSerializer,
    }
    write_serializer_class = ItemWriteSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ItemFilter
    search_fields = ['electronic_code', 'item_name', 'model', 'account_code', 'note']
    ordering_fields = ['sequence_no', 'electronic_code', 'item_name', 'registered_at', 'updated_at']
    order_field = 'sequence_no'

    import_aliases = spreadsheet.ITEM_COLUMN_ALIASES

    export_filename_setting = 'ECODE_EXPORT_FILENAME_ITEMS'
    export_sheet_title = '전산코드'
    export_columns = (
        ('NO', 'sequence_no'),
        ('등록일시', 'registered_at'),
        ('전산코드', 'electronic_code'),
        ('대분류', 'division'),
        ('산업군', 'industry_label'),
        ('부품군', lambda obj: f"{obj.part_group} {PART_GROUP_NAMES.get(obj.part_group, '')}".strip()),
        ('리비전', 'revision'),
        ('품목명', 'item_name'),
        ('품목유형', 'item_type'),
        ('양산/개발', 'status'),
        ('단위', 'unit'),
        ('모델', 'model'),
        ('회계코드', 'account_code'),
        ('비고', 'note'),
        ('작성자', 'author'),
    )

    def get_registry(self):
        return ItemRegistry(DjangoItemRepository(), max_attempts=settings.ECODE_CREATE_MAX_ATTEMPTS)

    def prepare_import_rows(self, rows):
        for row in rows:
            # "A00 S/Can" as exported -> "A00"
            if isinstance(row.get('part_group'), str):
                row['part_group'] = row['part_group'].split(' ', 1)[0]
        return spreadsheet.fill_code_parts(rows)

    @action(detail=False, methods=['get'], url_path='next-sequence')
    def next_sequence(self, request):
        """Sequence number the next registered item would receive."""
        return Response({'sequence_no': self.get_registry().next_sequence_no()})

    @action(detail=False, methods=['get'], url_path='last-code')
    def last_code(self, request):
        """Greatest electronic code currently registered."""
        return Response({'electronic_code': self.get_registry().last_code()})

    @action(detail=False, methods=['post'], url_path='derive-code')
    def derive_code(self, request):
        """Preview the electronic code for a payload without saving it."""
        payload, _ = self.validate_write(request.data, partial=True)
        item = self.get_registry().preview(payload)
        return Response(CodePreviewSerializer(item).data)

    def import_rows(self, request, rows, first_row):
        """
        Best-effort import; with ``replace=true`` every existing item is
        deleted first.
        """
        if not wants_replace(request):
            return super().import_rows(request, rows, first_row)
        return self.get_registry().replace_all(rows, actor=self.get_actor(), first_row=first_row)

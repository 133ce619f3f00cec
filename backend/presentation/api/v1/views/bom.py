"""
BOM Views.

API views for BOM lines and their tree view.
"""

from django_filters import rest_framework as django_filters
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters
from rest_framework.decorators import action
from rest_framework.response import Response

from application.services import BomRegistry
from domain.bom.tree import max_depth
from infrastructure import spreadsheet
from infrastructure.persistence.models import BomLine
from infrastructure.persistence.repositories import (
    DjangoBomLineRepository,
    DjangoItemRepository,
)

from ..serializers import (
    AttachCodeSerializer,
    AttachParentSerializer,
    BomLineSerializer,
    BomLineWriteSerializer,
    BomTreeNodeSerializer,
)
from .base import BaseModelViewSet, BulkActionMixin, ExportMixin


class BomLineFilter(django_filters.FilterSet):
    """Filter for BOM lines."""

    electronic_code = django_filters.CharFilter(lookup_expr='icontains')
    item_name = django_filters.CharFilter(lookup_expr='icontains')
    process = django_filters.CharFilter(lookup_expr='icontains')
    industry = django_filters.CharFilter(lookup_expr='icontains')
    model = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = BomLine
        fields = [
            'item_type', 'level', 'parent_code',
            'electronic_code', 'item_name', 'process', 'industry', 'model',
        ]


# Filters forwarded to the repository by the tree view
TREE_FILTERS = {
    'item_type': 'item_type',
    'level': 'level',
    'parent_code': 'parent_code',
    'electronic_code': 'electronic_code__icontains',
    'item_name': 'item_name__icontains',
    'process': 'process__icontains',
    'industry': 'industry__icontains',
    'model': 'model__icontains',
}


class BomLineViewSet(BulkActionMixin, ExportMixin, BaseModelViewSet):
    """
    ViewSet for BOM lines.

    A line points at its parent by code; neither code is checked against
    the catalog, so dangling parents and cycles can be stored and are
    flagged by the tree view.
    """

    queryset = BomLine.objects.select_related('created_by', 'updated_by')
    serializer_classes = {
        'default': BomLineSerializer,
    }
    write_serializer_class = BomLineWriteSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = BomLineFilter
    search_fields = ['electronic_code', 'item_name', 'parent_code', 'process', 'note']
    ordering_fields = ['line_no', 'level', 'electronic_code', 'updated_at']
    order_field = 'line_no'

    import_aliases = spreadsheet.BOM_COLUMN_ALIASES

    export_filename_setting = 'ECODE_EXPORT_FILENAME_BOM'
    export_sheet_title = 'BOM'
    export_columns = (
        ('NO', 'line_no'),
        ('산업군', 'industry'),
        ('모델', 'model'),
        ('품목유형', 'item_type'),
        ('레벨', 'level'),
        ('상위코드', 'parent_code'),
        ('전산코드', 'electronic_code'),
        ('품목명', 'item_name'),
        ('수량', 'quantity'),
        ('단위', 'unit'),
        ('공정', 'process'),
        ('비고', 'note'),
        ('작성자', 'author'),
    )

    def get_registry(self):
        return BomRegistry(DjangoBomLineRepository(), DjangoItemRepository())

    @action(detail=True, methods=['post'], url_path='attach-code')
    def attach_code(self, request, pk=None):
        """
        Select an item code for the line.

        Name, unit, type, model and industry are copied from the item. An
        unknown code leaves the line as it was.
        """
        serializer = AttachCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line = self.get_registry().attach_code(
            pk,
            serializer.validated_data['electronic_code'],
            expected_version=serializer.validated_data.get('version'),
            actor=self.get_actor(),
        )
        return self.render_entity(line)

    @action(detail=True, methods=['post'], url_path='attach-parent')
    def attach_parent(self, request, pk=None):
        """Set the parent code of the line. Any code is accepted."""
        serializer = AttachParentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line = self.get_registry().attach_parent(
            pk,
            serializer.validated_data.get('parent_code'),
            expected_version=serializer.validated_data.get('version'),
            actor=self.get_actor(),
        )
        return self.render_entity(line)

    @action(detail=False, methods=['get'], url_path='next-line-no')
    def next_line_no(self, request):
        return Response({'line_no': self.get_registry().next_line_no()})

    @action(detail=False, methods=['get'])
    def tree(self, request):
        """BOM lines arranged by parent code."""
        params = request.query_params
        lookups = {
            lookup: params[name]
            for name, lookup in TREE_FILTERS.items()
            if params.get(name) not in (None, '')
        }
        forest = self.get_registry().tree(lookups)
        return Response({
            'max_depth': max_depth(forest),
            'roots': BomTreeNodeSerializer(forest, many=True).data,
        })

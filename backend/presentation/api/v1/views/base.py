"""
Base Views.

Common view mixins and base classes. Writes go through the application
registries; reads use the ORM queryset so that filtering, ordering and
pagination stay with django-filter and DRF.
"""

import logging

from django.conf import settings
from django.http import HttpResponse
from django.utils import timezone
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure import spreadsheet
from presentation.api.permissions import IsCatalogAdmin

from ..serializers import BulkIdsSerializer, BulkResultSerializer, HistoryEntrySerializer

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


class ListingOrderMixin:
    """
    Default ordering taken from ``ECODE_LISTING_ORDER``.

    ``?ordering=`` still overrides it.
    """

    order_field = 'id'

    @property
    def ordering(self):
        if str(settings.ECODE_LISTING_ORDER).lower() == 'desc':
            return [f'-{self.order_field}']
        return [self.order_field]


class HistoryViewMixin:
    """
    Mixin for accessing object history.
    """

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        """Last 50 recorded changes of the object."""
        obj = self.get_object()

        history = obj.history.select_related('history_user')[:50]
        data = [{
            'id': h.history_id,
            'date': h.history_date,
            'user': str(h.history_user) if h.history_user else None,
            'type': h.history_type,
            'changes': h.history_change_reason,
        } for h in history]

        return Response(HistoryEntrySerializer(data, many=True).data)


class BulkActionMixin:
    """
    Mixin for best-effort bulk operations.

    Expects ``get_registry()``, ``import_aliases`` and optionally
    ``prepare_import_rows()`` on the view.
    """

    import_aliases = {}

    def prepare_import_rows(self, rows):
        return rows

    def import_rows(self, request, rows, first_row):
        return self.get_registry().bulk_create(rows, actor=self.get_actor(), first_row=first_row)

    def read_import_rows(self, request):
        """
        Rows to import from an ``.xlsx`` upload (field ``file``) or JSON.

        Returns ``(rows, first_row)``; spreadsheet rows are numbered from 2
        because row 1 holds the header.
        """
        upload = request.FILES.get('file')
        if upload is not None:
            if not upload.name.lower().endswith('.xlsx'):
                raise ValidationError({'file': '.xlsx 형식만 지원합니다.'})
            rows, first_row = spreadsheet.decode(upload), 2
        else:
            rows = request.data
            if isinstance(rows, dict):
                rows = rows.get('rows')
            if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
                raise ValidationError({'rows': '파일(file) 또는 행 목록(rows)이 필요합니다.'})
            first_row = 1
        rows = spreadsheet.normalize_rows(rows, self.import_aliases)
        return self.prepare_import_rows(rows), first_row

    @action(
        detail=False,
        methods=['post'],
        url_path='bulk-import',
        permission_classes=[IsCatalogAdmin],
        parser_classes=[JSONParser, MultiPartParser, FormParser],
    )
    def bulk_import(self, request):
        """Create every row independently; failures are reported per row."""
        rows, first_row = self.read_import_rows(request)
        result = self.import_rows(request, rows, first_row)
        code = status.HTTP_201_CREATED if result.succeeded else status.HTTP_200_OK
        return Response(BulkResultSerializer(result.to_dict()).data, status=code)

    @action(
        detail=False,
        methods=['post'],
        url_path='bulk-delete',
        permission_classes=[IsCatalogAdmin],
    )
    def bulk_delete(self, request):
        """Delete every listed id independently."""
        serializer = BulkIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_registry().bulk_delete(serializer.validated_data['ids'])
        return Response(BulkResultSerializer(result.to_dict()).data)


class ExportMixin:
    """
    ``export/`` action writing the filtered queryset to ``.xlsx``.

    ``export_columns`` is a sequence of ``(header, getter)`` pairs where the
    getter is an attribute name or a callable taking the instance.
    """

    export_columns = ()
    export_filename_setting = None
    export_sheet_title = 'Sheet1'

    def export_row(self, instance):
        row = {}
        for header, getter in self.export_columns:
            row[header] = getter(instance) if callable(getter) else getattr(instance, getter)
        return row

    @action(detail=False, methods=['get'])
    def export(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        headers = [header for header, _ in self.export_columns]
        content = spreadsheet.encode(
            (self.export_row(obj) for obj in queryset),
            headers=headers,
            sheet_title=self.export_sheet_title,
        )
        basename = getattr(settings, self.export_filename_setting, 'export')
        filename = f"{basename}_{timezone.localtime().strftime('%Y%m%d_%H%M%S')}.xlsx"
        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        logger.info(f"Exported {len(content)} bytes to {filename}")
        return response


class BaseModelViewSet(
    ListingOrderMixin,
    HistoryViewMixin,
    viewsets.ModelViewSet
):
    """
    Base viewset with common functionality.

    Subclasses provide ``get_registry()`` returning the application
    registry and ``write_serializer_class`` validating request bodies.
    Responses are rendered from the stored row.
    """
    permission_classes = [IsAuthenticated]
    write_serializer_class = serializers.Serializer

    def get_registry(self):
        raise NotImplementedError

    def get_serializer_class(self):
        """
        Return different serializers for list/retrieve actions.

        Override `serializer_classes` dict in subclass:
        serializer_classes = {
            'list': ListSerializer,
            'retrieve': DetailSerializer,
            'default': DetailSerializer,
        }
        """
        serializer_classes = getattr(self, 'serializer_classes', {})
        if self.action in serializer_classes:
            return serializer_classes[self.action]
        if 'default' in serializer_classes:
            return serializer_classes['default']
        return super().get_serializer_class()

    def get_actor(self):
        user = getattr(self.request, 'user', None)
        return user if user is not None and user.is_authenticated else None

    def validate_write(self, data, partial=False):
        """Validated write payload and the optional expected version."""
        serializer = self.write_serializer_class(data=data, partial=partial)
        serializer.is_valid(raise_exception=True)
        payload = dict(serializer.validated_data)
        return payload, payload.pop('version', None)

    def render_entity(self, entity, status_code=status.HTTP_200_OK):
        instance = self.get_queryset().get(pk=entity.id)
        serializer = self.serializer_classes['default'](instance, context=self.get_serializer_context())
        return Response(serializer.data, status=status_code)

    def create(self, request, *args, **kwargs):
        payload, _ = self.validate_write(request.data)
        entity = self.get_registry().create(payload, actor=self.get_actor())
        return self.render_entity(entity, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        payload, version = self.validate_write(request.data, partial=partial)
        entity = self.get_registry().update(
            kwargs['pk'], payload, expected_version=version, actor=self.get_actor()
        )
        return self.render_entity(entity)

    def destroy(self, request, *args, **kwargs):
        self.get_registry().delete(kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

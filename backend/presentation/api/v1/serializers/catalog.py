"""
Catalog Serializers.

Read serializers render ``persistence.Item`` rows; write serializers only
check types and choices. Required-field rules live in the domain entity so
that the API and spreadsheet imports report the same errors.
"""

from rest_framework import serializers

from domain.shared.value_objects import (
    Division,
    IndustryCode,
    ItemStatus,
    ItemType,
    PartGroup,
    revision_choices,
)
from infrastructure.persistence.models import Item

from .base import AuditFieldsMixin, BaseModelSerializer, VersionedWriteSerializer


class ItemListSerializer(BaseModelSerializer):
    """List serializer for items."""

    industry_label = serializers.CharField(read_only=True)
    part_group_display = serializers.CharField(source='get_part_group_display', read_only=True)

    class Meta:
        model = Item
        fields = [
            'id', 'sequence_no', 'electronic_code',
            'division', 'industry_code', 'industry_label',
            'part_group', 'part_group_display', 'revision',
            'item_name', 'item_type', 'status', 'unit', 'model',
            'registered_at', 'version',
        ]
        read_only_fields = fields


class ItemDetailSerializer(AuditFieldsMixin, BaseModelSerializer):
    """Detail serializer for items."""

    industry_label = serializers.CharField(read_only=True)
    part_group_display = serializers.CharField(source='get_part_group_display', read_only=True)

    class Meta:
        model = Item
        fields = [
            'id', 'sequence_no', 'electronic_code',
            'division', 'industry_code', 'industry_label',
            'part_group', 'part_group_display', 'revision',
            'item_name', 'item_type', 'status', 'unit',
            'model', 'account_code', 'note', 'author',
            'registered_at', 'version',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = fields


class ItemWriteSerializer(VersionedWriteSerializer):
    """
    Create/update payload for items.

    ``electronic_code`` is not accepted: it is always derived.
    """

    sequence_no = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    division = serializers.ChoiceField(choices=Division.choices(), required=False, allow_blank=True)
    industry_code = serializers.ChoiceField(choices=IndustryCode.choices(), required=False, allow_blank=True)
    part_group = serializers.ChoiceField(choices=PartGroup.choices(), required=False, allow_blank=True)
    revision = serializers.ChoiceField(choices=revision_choices(), required=False, allow_blank=True)
    item_name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    item_type = serializers.ChoiceField(choices=ItemType.choices(), required=False)
    status = serializers.ChoiceField(choices=ItemStatus.choices(), required=False)
    unit = serializers.CharField(required=False, allow_blank=True, max_length=20)
    model = serializers.CharField(required=False, allow_blank=True, max_length=100)
    account_code = serializers.CharField(required=False, allow_blank=True, max_length=50)
    note = serializers.CharField(required=False, allow_blank=True)
    author = serializers.CharField(required=False, allow_blank=True, max_length=50)


class CodePreviewSerializer(serializers.Serializer):
    """Result of ``derive-code``: the code an item would receive now."""

    sequence_no = serializers.IntegerField()
    electronic_code = serializers.CharField()

"""
BOM Serializers.

Serializers for BOM lines and their tree view.
"""

from rest_framework import serializers

from domain.shared.value_objects import ItemType
from infrastructure.persistence.models import BomLine

from .base import AuditFieldsMixin, BaseModelSerializer, VersionedWriteSerializer


class BomLineSerializer(AuditFieldsMixin, BaseModelSerializer):
    """Read serializer for BOM lines."""

    is_top_level = serializers.SerializerMethodField()

    class Meta:
        model = BomLine
        fields = [
            'id', 'line_no',
            'industry', 'model', 'item_type', 'level',
            'parent_code', 'electronic_code', 'item_name',
            'quantity', 'unit', 'process', 'note', 'author',
            'is_top_level', 'version',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = fields

    def get_is_top_level(self, obj) -> bool:
        return not obj.parent_code


class BomLineWriteSerializer(VersionedWriteSerializer):
    """Create/update payload for BOM lines."""

    line_no = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    industry = serializers.CharField(required=False, allow_blank=True, max_length=50)
    model = serializers.CharField(required=False, allow_blank=True, max_length=100)
    item_type = serializers.ChoiceField(choices=ItemType.choices(), required=False)
    level = serializers.IntegerField(required=False, min_value=1)
    parent_code = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=40)
    electronic_code = serializers.CharField(required=False, allow_blank=True, max_length=40)
    item_name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    quantity = serializers.DecimalField(max_digits=15, decimal_places=3, required=False)
    unit = serializers.CharField(required=False, allow_blank=True, max_length=20)
    process = serializers.CharField(required=False, allow_blank=True, max_length=100)
    note = serializers.CharField(required=False, allow_blank=True)
    author = serializers.CharField(required=False, allow_blank=True, max_length=50)


class AttachCodeSerializer(VersionedWriteSerializer):
    electronic_code = serializers.CharField(max_length=40)


class AttachParentSerializer(VersionedWriteSerializer):
    parent_code = serializers.CharField(allow_blank=True, allow_null=True, max_length=40)


class BomTreeNodeSerializer(serializers.Serializer):
    """Serializer for ``TreeNode`` objects built from BOM lines."""

    id = serializers.UUIDField(source='line.id')
    line_no = serializers.IntegerField(source='line.line_no')
    level = serializers.IntegerField(source='line.level')
    parent_code = serializers.CharField(source='line.parent_code')
    electronic_code = serializers.CharField(source='line.electronic_code')
    item_name = serializers.CharField(source='line.item_name')
    item_type = serializers.CharField(source='line.item_type')
    industry = serializers.CharField(source='line.industry')
    model = serializers.CharField(source='line.model')
    quantity = serializers.DecimalField(source='line.quantity', max_digits=15, decimal_places=3)
    unit = serializers.CharField(source='line.unit')
    process = serializers.CharField(source='line.process')
    depth = serializers.IntegerField()
    dangling_parent = serializers.BooleanField()
    in_cycle = serializers.BooleanField()
    children = serializers.SerializerMethodField()

    def get_children(self, obj):
        if obj.children:
            return BomTreeNodeSerializer(obj.children, many=True, context=self.context).data
        return []

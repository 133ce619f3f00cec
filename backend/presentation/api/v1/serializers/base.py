"""
Base Serializers.

Common serializer mixins and base classes.
"""

from rest_framework import serializers


class AuditFieldsMixin(serializers.Serializer):
    """Mixin for audit fields (created_at, updated_at, etc.)"""

    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
    created_by = serializers.StringRelatedField(read_only=True)
    updated_by = serializers.StringRelatedField(read_only=True)


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer with common configuration.
    """

    class Meta:
        abstract = True
        read_only_fields = ['id', 'version', 'created_at', 'updated_at']


class VersionedWriteSerializer(serializers.Serializer):
    """
    Input serializer carrying the optional optimistic-locking token.

    ``version`` is the value the client last read; it is compared, never written.
    """

    version = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class BulkIdsSerializer(serializers.Serializer):
    """Payload of bulk delete actions."""

    ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=False,
    )


class RowErrorSerializer(serializers.Serializer):
    row = serializers.CharField()
    error = serializers.CharField()
    message = serializers.CharField()
    field = serializers.CharField(allow_null=True)


class BulkResultSerializer(serializers.Serializer):
    """Outcome of a best-effort bulk action."""

    succeeded = serializers.ListField(child=serializers.CharField())
    succeeded_count = serializers.IntegerField()
    errors = RowErrorSerializer(many=True)
    errors_count = serializers.IntegerField()


class HistoryEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    date = serializers.DateTimeField()
    user = serializers.CharField(allow_null=True)
    type = serializers.CharField()
    changes = serializers.CharField(allow_null=True)

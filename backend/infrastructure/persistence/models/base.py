"""
Base ORM Models and Mixins.

Provides common functionality for all models:
- UUID primary keys
- Timestamps (created_at, updated_at)
- Version control
- Audit tracking
"""

import uuid
from django.db import models
from django.conf import settings
from simple_history.models import HistoricalRecords


class TimeStampedMixin(models.Model):
    """Mixin for created_at and updated_at timestamps."""

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="생성일시"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="수정일시"
    )

    class Meta:
        abstract = True


class VersionedMixin(models.Model):
    """Mixin for optimistic locking with version control."""

    version = models.PositiveIntegerField(
        default=1,
        verbose_name="버전"
    )

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            self.version += 1
        super().save(*args, **kwargs)


class AuditMixin(models.Model):
    """Mixin for tracking who created/modified records."""

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(class)s_created",
        verbose_name="생성자"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(class)s_updated",
        verbose_name="수정자"
    )

    class Meta:
        abstract = True


class BaseModel(TimeStampedMixin, VersionedMixin, AuditMixin):
    """
    Base model with all common functionality.

    Includes:
    - UUID primary key
    - Timestamps (created_at, updated_at)
    - Version control (version)
    - Audit (created_by, updated_by)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        verbose_name="ID"
    )

    class Meta:
        abstract = True

    def __str__(self):
        return str(self.id)


class BaseModelWithHistory(BaseModel):
    """
    Base model with historical records tracking.

    Uses django-simple-history to track all changes.
    """

    history = HistoricalRecords(inherit=True)

    class Meta:
        abstract = True

"""
Catalog ORM Models.

전산코드 품목 마스터:
- Item: 분류(대분류/산업군/부품군/리비전) + 순번으로 전산코드를 생성하는 품목
"""

from django.db import models
from django.utils import timezone

from domain.catalog.codes import derive_code
from domain.shared.value_objects import (
    DEFAULT_ITEM_TYPE,
    DEFAULT_REVISION,
    DEFAULT_STATUS,
    DEFAULT_UNIT,
    Division,
    IndustryCode,
    ItemStatus,
    ItemType,
    PartGroup,
    industry_label,
    revision_choices,
)

from .base import BaseModelWithHistory


class Item(BaseModelWithHistory):
    """
    전산코드 품목.

    ``electronic_code`` is always re-derived from the classification fields
    on save, so it cannot drift from division/industry/part group/sequence/
    revision. Both ``sequence_no`` and ``electronic_code`` are unique.
    """

    sequence_no = models.PositiveIntegerField(
        unique=True,
        verbose_name="NO"
    )

    # Classification
    division = models.CharField(
        max_length=1,
        choices=Division.choices(),
        verbose_name="대분류"
    )
    industry_code = models.CharField(
        max_length=1,
        choices=IndustryCode.choices(),
        verbose_name="산업군"
    )
    part_group = models.CharField(
        max_length=3,
        choices=PartGroup.choices(),
        verbose_name="부품군"
    )
    revision = models.CharField(
        max_length=1,
        choices=revision_choices(),
        default=DEFAULT_REVISION,
        verbose_name="리비전"
    )

    # Derived, never entered
    electronic_code = models.CharField(
        max_length=40,
        unique=True,
        editable=False,
        verbose_name="전산코드"
    )

    item_name = models.CharField(
        max_length=200,
        verbose_name="품목명"
    )
    item_type = models.CharField(
        max_length=10,
        choices=ItemType.choices(),
        default=DEFAULT_ITEM_TYPE,
        verbose_name="품목유형"
    )
    status = models.CharField(
        max_length=10,
        choices=ItemStatus.choices(),
        default=DEFAULT_STATUS,
        verbose_name="양산/개발"
    )
    unit = models.CharField(
        max_length=20,
        default=DEFAULT_UNIT,
        verbose_name="단위"
    )
    model = models.CharField(
        max_length=100,
        blank=True,
        verbose_name="모델"
    )
    account_code = models.CharField(
        max_length=50,
        blank=True,
        verbose_name="회계코드"
    )
    note = models.TextField(
        blank=True,
        verbose_name="비고"
    )
    author = models.CharField(
        max_length=50,
        blank=True,
        verbose_name="작성자"
    )
    registered_at = models.DateTimeField(
        default=timezone.now,
        verbose_name="등록일시"
    )

    class Meta:
        db_table = 'catalog_items'
        verbose_name = '전산코드 품목'
        verbose_name_plural = '전산코드 품목 관리'
        ordering = ['sequence_no']
        indexes = [
            models.Index(fields=['division', 'industry_code', 'part_group'], name='catalog_items_class_idx'),
            models.Index(fields=['item_name'], name='catalog_items_name_idx'),
        ]

    def __str__(self):
        return f"[{self.electronic_code}] {self.item_name}"

    @property
    def industry_label(self):
        return industry_label(self.industry_code)

    def save(self, *args, **kwargs):
        self.revision = self.revision or DEFAULT_REVISION
        self.electronic_code = derive_code(
            self.division,
            self.industry_code,
            self.part_group,
            self.sequence_no,
            self.revision,
        )
        super().save(*args, **kwargs)

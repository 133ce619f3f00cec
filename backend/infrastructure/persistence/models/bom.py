"""
BOM (Bill of Materials) ORM Models.

BOM lines link a child electronic code to the code of its parent assembly.
Codes are plain strings, not foreign keys: deleting an item or a parent
line never cascades.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from domain.shared.value_objects import DEFAULT_ITEM_TYPE, DEFAULT_UNIT, ItemType

from .base import BaseModelWithHistory


class BomLine(BaseModelWithHistory):
    """
    Single BOM line.

    ``industry``, ``model``, ``item_type``, ``item_name`` and ``unit`` are a
    snapshot copied from the catalog item when its code was selected.
    """

    line_no = models.PositiveIntegerField(
        db_index=True,
        verbose_name="NO"
    )

    # Denormalized classification
    industry = models.CharField(
        max_length=50,
        blank=True,
        verbose_name="산업군"
    )
    model = models.CharField(
        max_length=100,
        blank=True,
        verbose_name="모델"
    )
    item_type = models.CharField(
        max_length=10,
        choices=ItemType.choices(),
        default=DEFAULT_ITEM_TYPE,
        verbose_name="품목유형"
    )
    level = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        verbose_name="레벨"
    )

    # Links (by code, not enforced)
    parent_code = models.CharField(
        max_length=40,
        blank=True,
        default='',
        db_index=True,
        verbose_name="상위코드"
    )
    electronic_code = models.CharField(
        max_length=40,
        db_index=True,
        verbose_name="전산코드"
    )
    item_name = models.CharField(
        max_length=200,
        verbose_name="품목명"
    )

    quantity = models.DecimalField(
        max_digits=15,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name="수량"
    )
    unit = models.CharField(
        max_length=20,
        default=DEFAULT_UNIT,
        verbose_name="단위"
    )
    process = models.CharField(
        max_length=100,
        blank=True,
        verbose_name="공정"
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

    class Meta:
        db_table = 'bom_lines'
        verbose_name = 'BOM'
        verbose_name_plural = 'BOM 관리'
        ordering = ['line_no']

    def __str__(self):
        parent = self.parent_code or "ROOT"
        return f"{parent} → {self.electronic_code} x{self.quantity}"

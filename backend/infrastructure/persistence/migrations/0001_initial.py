import decimal
import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import simple_history.models
from django.conf import settings
from django.db import migrations, models


DIVISION_CHOICES = [('A', 'A'), ('B', 'B'), ('C', 'C'), ('D', 'D'), ('E', 'E')]

INDUSTRY_CHOICES = [('E', 'E 전기차'), ('H', 'H 수소'), ('I', 'I IT')]

PART_GROUP_CHOICES = [
    ('A00', 'A00 S/Can'),
    ('B00', 'B00 Busbar'),
    ('C00', 'C00 Connector'),
    ('D00', 'D00 DummyPlate'),
    ('E00', 'E00 EndPlate'),
    ('F00', 'F00 Foldable'),
    ('G00', 'G00 Slidable'),
    ('R00', 'R00 Rollable'),
    ('P00', 'P00 PorousPlate'),
    ('S00', 'S00 SidePlate'),
    ('T00', 'T00 Tab'),
    ('U00', 'U00 Cell'),
    ('V00', 'V00 BP'),
    ('X00', 'X00 기타'),
]

REVISION_CHOICES = [
    ('A', 'A'), ('B', 'B'), ('C', 'C'), ('D', 'D'), ('E', 'E'), ('F', 'F'),
    ('G', 'G'), ('H', 'H'), ('I', 'I'), ('J', 'J'), ('K', 'K'), ('L', 'L'),
    ('M', 'M'), ('N', 'N'), ('O', 'O'), ('P', 'P'), ('Q', 'Q'), ('R', 'R'),
    ('S', 'S'), ('T', 'T'), ('U', 'U'), ('V', 'V'), ('W', 'W'), ('X', 'X'),
    ('Y', 'Y'), ('Z', 'Z'),
]

ITEM_TYPE_CHOICES = [
    ('제품', '제품'), ('상품', '상품'), ('반제품', '반제품'), ('원자재', '원자재'), ('부자재', '부자재'),
]

STATUS_CHOICES = [('양산', '양산'), ('개발', '개발')]

HISTORY_TYPE_CHOICES = [('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # =====================================================================
        # Item
        # =====================================================================
        migrations.CreateModel(
            name='Item',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='생성일시')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='수정일시')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='버전')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('sequence_no', models.PositiveIntegerField(unique=True, verbose_name='NO')),
                ('division', models.CharField(choices=DIVISION_CHOICES, max_length=1, verbose_name='대분류')),
                ('industry_code', models.CharField(choices=INDUSTRY_CHOICES, max_length=1, verbose_name='산업군')),
                ('part_group', models.CharField(choices=PART_GROUP_CHOICES, max_length=3, verbose_name='부품군')),
                ('revision', models.CharField(choices=REVISION_CHOICES, default='A', max_length=1, verbose_name='리비전')),
                ('electronic_code', models.CharField(editable=False, max_length=40, unique=True, verbose_name='전산코드')),
                ('item_name', models.CharField(max_length=200, verbose_name='품목명')),
                ('item_type', models.CharField(choices=ITEM_TYPE_CHOICES, default='제품', max_length=10, verbose_name='품목유형')),
                ('status', models.CharField(choices=STATUS_CHOICES, default='양산', max_length=10, verbose_name='양산/개발')),
                ('unit', models.CharField(default='EA', max_length=20, verbose_name='단위')),
                ('model', models.CharField(blank=True, max_length=100, verbose_name='모델')),
                ('account_code', models.CharField(blank=True, max_length=50, verbose_name='회계코드')),
                ('note', models.TextField(blank=True, verbose_name='비고')),
                ('author', models.CharField(blank=True, max_length=50, verbose_name='작성자')),
                ('registered_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='등록일시')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='item_created', to=settings.AUTH_USER_MODEL, verbose_name='생성자')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='item_updated', to=settings.AUTH_USER_MODEL, verbose_name='수정자')),
            ],
            options={
                'verbose_name': '전산코드 품목',
                'verbose_name_plural': '전산코드 품목 관리',
                'db_table': 'catalog_items',
                'ordering': ['sequence_no'],
                'indexes': [
                    models.Index(fields=['division', 'industry_code', 'part_group'], name='catalog_items_class_idx'),
                    models.Index(fields=['item_name'], name='catalog_items_name_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='HistoricalItem',
            fields=[
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='생성일시')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='수정일시')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='버전')),
                ('id', models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, verbose_name='ID')),
                ('sequence_no', models.PositiveIntegerField(db_index=True, verbose_name='NO')),
                ('division', models.CharField(choices=DIVISION_CHOICES, max_length=1, verbose_name='대분류')),
                ('industry_code', models.CharField(choices=INDUSTRY_CHOICES, max_length=1, verbose_name='산업군')),
                ('part_group', models.CharField(choices=PART_GROUP_CHOICES, max_length=3, verbose_name='부품군')),
                ('revision', models.CharField(choices=REVISION_CHOICES, default='A', max_length=1, verbose_name='리비전')),
                ('electronic_code', models.CharField(db_index=True, editable=False, max_length=40, verbose_name='전산코드')),
                ('item_name', models.CharField(max_length=200, verbose_name='품목명')),
                ('item_type', models.CharField(choices=ITEM_TYPE_CHOICES, default='제품', max_length=10, verbose_name='품목유형')),
                ('status', models.CharField(choices=STATUS_CHOICES, default='양산', max_length=10, verbose_name='양산/개발')),
                ('unit', models.CharField(default='EA', max_length=20, verbose_name='단위')),
                ('model', models.CharField(blank=True, max_length=100, verbose_name='모델')),
                ('account_code', models.CharField(blank=True, max_length=50, verbose_name='회계코드')),
                ('note', models.TextField(blank=True, verbose_name='비고')),
                ('author', models.CharField(blank=True, max_length=50, verbose_name='작성자')),
                ('registered_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='등록일시')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ('created_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='생성자')),
                ('updated_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='수정자')),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'historical 전산코드 품목',
                'verbose_name_plural': 'historical 전산코드 품목 관리',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),

        # =====================================================================
        # BOM line
        # =====================================================================
        migrations.CreateModel(
            name='BomLine',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='생성일시')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='수정일시')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='버전')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('line_no', models.PositiveIntegerField(db_index=True, verbose_name='NO')),
                ('industry', models.CharField(blank=True, max_length=50, verbose_name='산업군')),
                ('model', models.CharField(blank=True, max_length=100, verbose_name='모델')),
                ('item_type', models.CharField(choices=ITEM_TYPE_CHOICES, default='제품', max_length=10, verbose_name='품목유형')),
                ('level', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)], verbose_name='레벨')),
                ('parent_code', models.CharField(blank=True, db_index=True, default='', max_length=40, verbose_name='상위코드')),
                ('electronic_code', models.CharField(db_index=True, max_length=40, verbose_name='전산코드')),
                ('item_name', models.CharField(max_length=200, verbose_name='품목명')),
                ('quantity', models.DecimalField(decimal_places=3, default=decimal.Decimal('0'), max_digits=15, verbose_name='수량')),
                ('unit', models.CharField(default='EA', max_length=20, verbose_name='단위')),
                ('process', models.CharField(blank=True, max_length=100, verbose_name='공정')),
                ('note', models.TextField(blank=True, verbose_name='비고')),
                ('author', models.CharField(blank=True, max_length=50, verbose_name='작성자')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bomline_created', to=settings.AUTH_USER_MODEL, verbose_name='생성자')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bomline_updated', to=settings.AUTH_USER_MODEL, verbose_name='수정자')),
            ],
            options={
                'verbose_name': 'BOM',
                'verbose_name_plural': 'BOM 관리',
                'db_table': 'bom_lines',
                'ordering': ['line_no'],
            },
        ),
        migrations.CreateModel(
            name='HistoricalBomLine',
            fields=[
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='생성일시')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='수정일시')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='버전')),
                ('id', models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, verbose_name='ID')),
                ('line_no', models.PositiveIntegerField(db_index=True, verbose_name='NO')),
                ('industry', models.CharField(blank=True, max_length=50, verbose_name='산업군')),
                ('model', models.CharField(blank=True, max_length=100, verbose_name='모델')),
                ('item_type', models.CharField(choices=ITEM_TYPE_CHOICES, default='제품', max_length=10, verbose_name='품목유형')),
                ('level', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)], verbose_name='레벨')),
                ('parent_code', models.CharField(blank=True, db_index=True, default='', max_length=40, verbose_name='상위코드')),
                ('electronic_code', models.CharField(db_index=True, max_length=40, verbose_name='전산코드')),
                ('item_name', models.CharField(max_length=200, verbose_name='품목명')),
                ('quantity', models.DecimalField(decimal_places=3, default=decimal.Decimal('0'), max_digits=15, verbose_name='수량')),
                ('unit', models.CharField(default='EA', max_length=20, verbose_name='단위')),
                ('process', models.CharField(blank=True, max_length=100, verbose_name='공정')),
                ('note', models.TextField(blank=True, verbose_name='비고')),
                ('author', models.CharField(blank=True, max_length=50, verbose_name='작성자')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ('created_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='생성자')),
                ('updated_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='수정자')),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'historical BOM',
                'verbose_name_plural': 'historical BOM 관리',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]

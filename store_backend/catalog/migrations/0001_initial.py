"""
======================================================
PATH: catalog/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Category + Product (CATALOG SCHEMA)

Purpose:
- Category and Product tables with unique, exact-match names.
- Product <-> Category many-to-many link table.
- DB-level guards: price >= 0, quantity >= 0.
"""

from __future__ import annotations

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        primary_key=True,
                        default=uuid.uuid4,
                        editable=False,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=255, unique=True, db_index=True)),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "categories",
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        primary_key=True,
                        default=uuid.uuid4,
                        editable=False,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=255, unique=True, db_index=True)),
                ("description", models.TextField(blank=True, default="")),
                ("price", models.DecimalField(max_digits=12, decimal_places=2)),
                ("quantity", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "categories",
                    models.ManyToManyField(
                        to="catalog.category",
                        blank=True,
                        related_name="products",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.AddConstraint(
            model_name="product",
            constraint=models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="chk_product_price_gte_zero",
            ),
        ),
        migrations.AddConstraint(
            model_name="product",
            constraint=models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="chk_product_quantity_gte_zero",
            ),
        ),
    ]

# catalog/services/catalog_store.py

"""
======================================================
PATH: catalog/services/catalog_store.py
======================================================
CATALOG STORE (ORM ADAPTER + UNIT OF WORK)

Purpose:
- Batch reads for pricing (one query + one prefetch, no per-line round-trips).
- Name lookups for stock import (optionally row-locked).
- Stage new/changed Category + Product records in memory and persist them
  together in commit().

Rules:
- Nothing staged touches the database before commit().
- commit() is all-or-nothing; any DB failure becomes CatalogPersistenceError.
- The stage is cleared after every commit attempt (success or failure).
- for_update lookups require an open transaction (import_stock provides one).
"""

from __future__ import annotations

import logging
import uuid

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from catalog.models import Category, Product
from catalog.services.exceptions import CatalogPersistenceError
from catalog.services.types import ProductSnapshot

logger = logging.getLogger(__name__)


def _normalize_ids(ids) -> list[uuid.UUID]:
    """
    Keep only values that parse as UUIDs.
    Anything else cannot match a product, so it is left for the caller to skip.
    """
    out = []
    for raw in ids or ():
        if isinstance(raw, uuid.UUID):
            out.append(raw)
            continue
        try:
            out.append(uuid.UUID(str(raw).strip()))
        except (TypeError, ValueError, AttributeError):
            continue
    return out


class CatalogStore:
    def __init__(self):
        self._pending_categories: dict[str, Category] = {}
        self._pending_products: dict[str, tuple[Product, list[Category]]] = {}

    # -------------------------------------------------
    # READS
    # -------------------------------------------------

    def fetch_products_by_ids(self, ids) -> list[ProductSnapshot]:
        valid_ids = _normalize_ids(ids)
        if not valid_ids:
            return []

        qs = Product.objects.filter(id__in=valid_ids).prefetch_related("categories")
        return [ProductSnapshot.from_model(p) for p in qs]

    def fetch_product_by_name(self, name: str, *, for_update: bool = False) -> Product | None:
        qs = Product.objects.all()
        if for_update:
            qs = qs.select_for_update()
        return qs.filter(name=name).first()

    def fetch_category_by_name(self, name: str) -> Category | None:
        return Category.objects.filter(name=name).first()

    # -------------------------------------------------
    # STAGING
    # -------------------------------------------------

    def create_category(self, name: str) -> Category:
        category = Category(name=name)
        self._pending_categories[name] = category
        return category

    def create_product(self, *, name: str, price, quantity: int, description: str = "") -> Product:
        product = Product(
            name=name,
            description=description,
            price=price,
            quantity=quantity,
        )
        self.stage_product(product, categories=())
        return product

    def stage_product(self, product: Product, categories) -> None:
        """
        Mark product as changed; categories REPLACE its current set on commit.
        """
        self._pending_products[str(product.pk)] = (product, list(categories))

    @property
    def has_pending(self) -> bool:
        return bool(self._pending_categories or self._pending_products)

    def discard(self) -> None:
        self._pending_categories.clear()
        self._pending_products.clear()

    # -------------------------------------------------
    # COMMIT
    # -------------------------------------------------

    def commit(self) -> None:
        categories = list(self._pending_categories.values())
        products = list(self._pending_products.values())
        self.discard()

        if not categories and not products:
            return

        try:
            with transaction.atomic():
                for category in categories:
                    category.full_clean(validate_unique=False, validate_constraints=False)
                    category.save()

                for product, product_categories in products:
                    product.full_clean(validate_unique=False, validate_constraints=False)
                    product.save()
                    product.categories.set(product_categories)
        except (DatabaseError, ValidationError) as exc:
            logger.error(
                "Catalog commit failed",
                extra={
                    "categories": len(categories),
                    "products": len(products),
                    "error": str(exc),
                },
            )
            raise CatalogPersistenceError(f"Catalog commit failed: {exc}") from exc

        logger.info(
            "Catalog commit succeeded",
            extra={"categories": len(categories), "products": len(products)},
        )

# catalog/services/stock_import.py

"""
======================================================
PATH: catalog/services/stock_import.py
======================================================
STOCK IMPORT MERGER (APPLICATION SERVICE)

Purpose:
- Reconcile an ordered batch of import lines against the catalog.
- Create categories and products on demand; update existing products.
- Persist the whole batch as ONE unit of work.

Rules (per line, in input order):
- Category names are trimmed, then looked up by exact name. A missing
  category is created once per batch; later lines reuse that instance.
- Product is looked up by exact name.
    - missing  -> created (empty description, line price/quantity/categories)
    - existing -> quantity += line.quantity (additive, signed; never below 0)
                  price      = line.price    (replaced)
                  categories = line categories (replaced)
- A name repeated inside the batch sees the earlier line's in-memory state.

Concurrency:
- Runs inside transaction.atomic().
- Existing products are read with SELECT ... FOR UPDATE, so two imports of
  the same product serialize instead of losing an additive update.
- Two imports creating the same NEW name collide on the unique constraint
  and the loser gets CatalogPersistenceError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from django.db import transaction

from catalog.services.catalog_store import CatalogStore
from catalog.services.exceptions import EmptyImportError, InvalidLineError
from catalog.services.types import ImportLine, StockImportResult

logger = logging.getLogger(__name__)


def as_import_line(value) -> ImportLine:
    """
    Accept an ImportLine or a {"name", "categories", "price", "quantity"} mapping.
    """
    if isinstance(value, ImportLine):
        return value
    if isinstance(value, Mapping):
        return ImportLine(
            name=value.get("name"),
            categories=value.get("categories") or (),
            price=value.get("price"),
            quantity=value.get("quantity"),
        )
    raise InvalidLineError("import line must be an ImportLine or a mapping")


def _resolve_category(name: str, *, catalog, seen: dict, created: list):
    category = seen.get(name)
    if category is None:
        category = catalog.fetch_category_by_name(name)

    if category is None:
        category = catalog.create_category(name)
        created.append(name)
        logger.info("Category created", extra={"category": name})

    seen[name] = category
    return category


@transaction.atomic
def import_stock(import_lines, catalog=None) -> StockImportResult:
    """
    Apply import_lines to the catalog and commit once.

    Raises:
    - EmptyImportError when there is nothing to import
    - InvalidLineError for malformed lines, or a delta that would leave
      stock negative (the whole batch is rejected)
    - CatalogPersistenceError when the commit fails (nothing is applied)
    """
    lines = [as_import_line(v) for v in import_lines or ()]
    if not lines:
        raise EmptyImportError("No data provided.")

    if catalog is None:
        catalog = CatalogStore()

    logger.info("Stock import started", extra={"lines": len(lines)})

    # Call-scoped identity maps; discarded when the call returns.
    categories_by_name: dict = {}
    products_by_name: dict = {}

    created_categories: list[str] = []
    created_products: list[str] = []
    updated_products: list[str] = []

    try:
        for line in lines:
            resolved = [
                _resolve_category(
                    name,
                    catalog=catalog,
                    seen=categories_by_name,
                    created=created_categories,
                )
                for name in line.categories
            ]

            product = products_by_name.get(line.name)
            if product is None:
                product = catalog.fetch_product_by_name(line.name, for_update=True)

            if product is None:
                if line.quantity < 0:
                    raise InvalidLineError(
                        f"Cannot create {line.name} with negative quantity {line.quantity}"
                    )
                product = catalog.create_product(
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    description="",
                )
                created_products.append(line.name)
                logger.info(
                    "Product created",
                    extra={"product": line.name, "quantity": line.quantity},
                )
            else:
                before = int(product.quantity or 0)
                if before + line.quantity < 0:
                    raise InvalidLineError(
                        f"Stock for {line.name} cannot go below zero "
                        f"(on hand: {before}, delta: {line.quantity})"
                    )
                product.quantity = before + line.quantity
                product.price = line.price
                if line.name not in created_products and line.name not in updated_products:
                    updated_products.append(line.name)
                logger.info(
                    "Product updated",
                    extra={
                        "product": line.name,
                        "quantity_before": before,
                        "quantity_after": product.quantity,
                    },
                )

            products_by_name[line.name] = product
            catalog.stage_product(product, resolved)
    except Exception:
        catalog.discard()
        raise

    catalog.commit()

    result = StockImportResult(
        created_products=tuple(created_products),
        updated_products=tuple(updated_products),
        created_categories=tuple(created_categories),
    )

    logger.info(
        "Stock import committed",
        extra={
            "created_products": len(result.created_products),
            "updated_products": len(result.updated_products),
            "created_categories": len(result.created_categories),
        },
    )
    return result

# catalog/services/discount.py

"""
======================================================
PATH: catalog/services/discount.py
======================================================
CART PRICING + BULK-CATEGORY DISCOUNT

Purpose:
- Price a cart (ordered lines) against one batch fetch of the catalog.
- Apply the bulk-category discount: a line earns RATE * unit price (once,
  not per unit) when any of its categories has accumulated more than
  THRESHOLD units across the lines priced so far, this line included.

Hard rules:
- Lines are priced strictly in caller order; qualification depends on it.
- Unknown product ids are skipped (no totals, no category counts) and
  reported in CartDiscountResult.skipped_product_ids.
- The first line with insufficient stock aborts the whole call; the result
  carries only the message.
- Decimal arithmetic only; no intermediate rounding.
- Read-only: nothing is written.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Tuple

from django.conf import settings

from catalog.services.catalog_store import CatalogStore
from catalog.services.exceptions import InvalidLineError
from catalog.services.inventory import validate_stock
from catalog.services.types import ZERO, CartDiscountResult, CartLine, id_key

logger = logging.getLogger(__name__)

DEFAULT_BULK_DISCOUNT_RATE = Decimal("0.05")
DEFAULT_BULK_DISCOUNT_THRESHOLD = 1


def bulk_discount_rate() -> Decimal:
    raw = getattr(settings, "CATALOG_BULK_DISCOUNT_RATE", None)
    if raw in (None, ""):
        return DEFAULT_BULK_DISCOUNT_RATE
    return Decimal(str(raw))


def bulk_discount_threshold() -> int:
    raw = getattr(settings, "CATALOG_BULK_DISCOUNT_THRESHOLD", None)
    if raw in (None, ""):
        return DEFAULT_BULK_DISCOUNT_THRESHOLD
    return int(raw)


def as_cart_line(value) -> CartLine:
    """
    Accept a CartLine, a {"product_id", "quantity"} mapping, or a pair.
    """
    if isinstance(value, CartLine):
        return value
    if isinstance(value, Mapping):
        return CartLine(product_id=value.get("product_id"), quantity=value.get("quantity"))
    try:
        product_id, quantity = value
    except (TypeError, ValueError) as exc:
        raise InvalidLineError("cart line must be (product_id, quantity)") from exc
    return CartLine(product_id=product_id, quantity=quantity)


@dataclass(frozen=True)
class _PricingState:
    """
    Accumulator threaded through the fold over cart lines.
    category_counts is replaced, never mutated, on each step.
    """

    category_counts: Mapping[str, int] = field(default_factory=dict)
    total: Decimal = ZERO
    total_discount: Decimal = ZERO
    skipped: Tuple[object, ...] = ()
    failure: str | None = None


def _price_line(state: _PricingState, line: CartLine, products, *, rate, threshold) -> _PricingState:
    product = products.get(id_key(line.product_id))
    if product is None:
        return replace(state, skipped=state.skipped + (line.product_id,))

    check = validate_stock(product, line.quantity)
    if not check.ok:
        return replace(state, failure=check.message)

    counts = dict(state.category_counts)
    for name in product.category_names:
        counts[name] = counts.get(name, 0) + line.quantity

    qualifies = any(counts[name] > threshold for name in product.category_names)
    discount = product.price * rate if qualifies else ZERO

    return replace(
        state,
        category_counts=counts,
        total=state.total + product.price * line.quantity,
        total_discount=state.total_discount + discount,
    )


def compute_discount(cart_lines, catalog=None, *, rate=None, threshold=None) -> CartDiscountResult:
    """
    Price cart_lines and apply the bulk-category discount.

    catalog: anything with fetch_products_by_ids(ids) -> ProductSnapshot list
    (defaults to the ORM-backed CatalogStore).
    """
    lines = [as_cart_line(v) for v in cart_lines]

    if catalog is None:
        catalog = CatalogStore()

    rate = bulk_discount_rate() if rate is None else Decimal(str(rate))
    threshold = bulk_discount_threshold() if threshold is None else int(threshold)

    distinct_ids = list(dict.fromkeys(line.product_id for line in lines))
    products = {id_key(p.id): p for p in catalog.fetch_products_by_ids(distinct_ids)}

    state = _PricingState()
    for line in lines:
        state = _price_line(state, line, products, rate=rate, threshold=threshold)
        if state.failure:
            logger.info(
                "Cart rejected: insufficient stock",
                extra={"product_id": str(line.product_id), "requested": line.quantity},
            )
            return CartDiscountResult.failure(state.failure)

    if state.skipped:
        logger.warning(
            "Cart lines skipped: unknown products",
            extra={"product_ids": [str(pid) for pid in state.skipped]},
        )

    result = CartDiscountResult(
        total_before_discount=state.total,
        total_discount=state.total_discount,
        final_price=state.total - state.total_discount,
        skipped_product_ids=state.skipped,
    )

    logger.info(
        "Cart priced",
        extra={
            "lines": len(lines),
            "total_before_discount": str(result.total_before_discount),
            "total_discount": str(result.total_discount),
        },
    )
    return result

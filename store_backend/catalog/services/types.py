# catalog/services/types.py

"""
CATALOG DATA CONTRACTS

Transient values exchanged with the pricing and import services.

Rules:
- Money is Decimal, never float.
- Quantities are integer units.
- Lines normalise their inputs at construction, so services can trust them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Tuple

from catalog.services.exceptions import InvalidLineError

ZERO = Decimal("0")


def id_key(value) -> str:
    """
    Canonical string form of a product id: UUIDs in any spelling compare
    equal, anything else is compared as its string form.
    """
    try:
        return str(uuid.UUID(str(value).strip()))
    except (TypeError, ValueError, AttributeError):
        return str(value)


def _to_int(value, *, field_name="value") -> int:
    if value is None or value == "":
        raise InvalidLineError(f"{field_name} is required")
    if isinstance(value, bool):
        raise InvalidLineError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidLineError(f"{field_name} must be a whole integer unit")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidLineError(f"{field_name} must be an integer")


def _to_decimal(value, *, field_name="value") -> Decimal:
    if value is None or value == "":
        raise InvalidLineError(f"{field_name} is required")
    if isinstance(value, bool):
        raise InvalidLineError(f"{field_name} must be a valid decimal")
    try:
        dec = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidLineError(f"{field_name} must be a valid decimal") from exc
    if not dec.is_finite():
        raise InvalidLineError(f"{field_name} must be a valid decimal")
    return dec


def clean_category_names(names) -> Tuple[str, ...]:
    """
    Trim category names and drop blanks, keeping first-seen order.
    Duplicates after trimming collapse to one entry.
    """
    if isinstance(names, str):
        raise InvalidLineError("categories must be a list of names")

    out = []
    for raw in names or ():
        name = str(raw or "").strip()
        if name and name not in out:
            out.append(name)
    return tuple(out)


@dataclass(frozen=True)
class CartLine:
    """
    One requested cart line.

    - product_id: catalog identifier (opaque; matched through id_key)
    - quantity: requested units (>= 1)
    """

    product_id: object
    quantity: int

    def __post_init__(self):
        qty = _to_int(self.quantity, field_name="quantity")
        if qty <= 0:
            raise InvalidLineError("quantity must be at least 1")
        object.__setattr__(self, "quantity", qty)


@dataclass(frozen=True)
class ImportLine:
    """
    One stock import record.

    - name: product name (exact-match key, kept verbatim)
    - categories: category names (trimmed, blanks dropped)
    - price: new unit price (replaces the current one)
    - quantity: signed delta ADDED to the current stock (negative = correction)
    """

    name: str
    categories: Tuple[str, ...]
    price: Decimal
    quantity: int

    def __post_init__(self):
        # product names are matched exactly as given (only category names are trimmed)
        name = str(self.name or "")
        if not name.strip():
            raise InvalidLineError("name is required")

        price = _to_decimal(self.price, field_name="price")
        if price < ZERO:
            raise InvalidLineError("price must be non-negative")

        qty = _to_int(self.quantity, field_name="quantity")

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "categories", clean_category_names(self.categories))
        object.__setattr__(self, "price", price)
        object.__setattr__(self, "quantity", qty)


@dataclass(frozen=True)
class ProductSnapshot:
    """
    Read-only view of a product as the pricing engine sees it.
    """

    id: object
    name: str
    price: Decimal
    quantity: int
    category_names: Tuple[str, ...] = ()

    @classmethod
    def from_model(cls, product) -> "ProductSnapshot":
        # categories must be prefetched; .all() then hits the cache
        return cls(
            id=product.id,
            name=product.name,
            price=Decimal(product.price),
            quantity=int(product.quantity or 0),
            category_names=tuple(c.name for c in product.categories.all()),
        )


@dataclass(frozen=True)
class CartDiscountResult:
    """
    Outcome of pricing a cart.

    - message set: the cart was rejected; numeric fields are zero and must
      be ignored by callers
    - message None: final_price == total_before_discount - total_discount
    - skipped_product_ids: cart ids that matched no product (never priced)
    """

    total_before_discount: Decimal = ZERO
    total_discount: Decimal = ZERO
    final_price: Decimal = ZERO
    message: str | None = None
    skipped_product_ids: Tuple[object, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.message is None

    @classmethod
    def failure(cls, message: str) -> "CartDiscountResult":
        return cls(message=message)


@dataclass(frozen=True)
class StockImportResult:
    """
    Names touched by one committed import batch, in first-seen order.
    """

    created_products: Tuple[str, ...] = ()
    updated_products: Tuple[str, ...] = ()
    created_categories: Tuple[str, ...] = ()

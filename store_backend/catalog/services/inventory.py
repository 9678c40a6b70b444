# catalog/services/inventory.py

"""
INVENTORY VALIDATOR

Answers one question per cart line: is there enough stock on hand?

Rules:
- No side effects, no aggregation across lines.
- Insufficient stock is a normal outcome (StockCheck), not an exception;
  the pricing engine decides to abort on it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StockCheck:
    ok: bool
    requested: int
    available: int
    message: str | None = None


def insufficient_stock_message(*, name: str, requested: int, available: int) -> str:
    return f"Not enough stock for {name} (requested: {requested}, available: {available})"


def validate_stock(product, requested_quantity: int) -> StockCheck:
    """
    Fails when requested_quantity > product.quantity.

    Accepts anything exposing name + quantity (ORM Product or ProductSnapshot).
    """
    requested = int(requested_quantity)
    available = int(getattr(product, "quantity", 0) or 0)

    if requested > available:
        return StockCheck(
            ok=False,
            requested=requested,
            available=available,
            message=insufficient_stock_message(
                name=getattr(product, "name", "product"),
                requested=requested,
                available=available,
            ),
        )

    return StockCheck(ok=True, requested=requested, available=available)

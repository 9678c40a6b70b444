# catalog/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .category import Category


class Product(models.Model):
    """
    Represents a sellable product.

    STOCK MODEL:
    - quantity is the on-hand count, stored directly on the product
    - it is never negative (DB constraint + clean())
    - stock imports add to it; pricing only reads it
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, unique=True, db_index=True)
    description = models.TextField(blank=True, default="")

    # Current selling price
    price = models.DecimalField(max_digits=12, decimal_places=2)

    quantity = models.PositiveIntegerField(default=0)

    categories = models.ManyToManyField(
        Category,
        blank=True,
        related_name="products",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=Q(price__gte=0),
                name="chk_product_price_gte_zero",
            ),
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name="chk_product_quantity_gte_zero",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.quantity} in stock)"

    def clean(self):
        if not (self.name or "").strip():
            raise ValidationError({"name": "Product name is required"})

        if self.price is None or Decimal(self.price) < Decimal("0.00"):
            raise ValidationError({"price": "Price must be non-negative"})

        if self.quantity is None or int(self.quantity) < 0:
            raise ValidationError({"quantity": "Quantity cannot be negative"})

    @property
    def category_names(self) -> list[str]:
        return [c.name for c in self.categories.all()]

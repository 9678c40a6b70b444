# catalog/models/category.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models


class Category(models.Model):
    """
    Product grouping used by the bulk-category discount.

    NAME RULES:
    - name is the lookup key for stock imports (exact, case-sensitive)
    - surrounding whitespace is stripped before save
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, unique=True, db_index=True)
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Category name is required"})

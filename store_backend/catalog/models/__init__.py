"""
PATH: catalog/models/__init__.py

Catalog models export surface.
"""

from .category import Category
from .product import Product

__all__ = [
    "Category",
    "Product",
]

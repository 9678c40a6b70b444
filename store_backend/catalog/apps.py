# catalog/apps.py

"""
CATALOG APP CONFIG

Computer store catalog:
- Category / Product records (many-to-many)
- Cart pricing with the bulk-category discount
- Stock import merger (atomic, create-or-update by name)
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"

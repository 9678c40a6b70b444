# catalog/admin.py
"""
=====================================================
PATH: catalog/admin.py
=====================================================

Admin rules (visibility only):

- Catalog rows change through the stock import service, which keeps
  quantity updates additive and commits a batch as one unit.
- Admin therefore lists and searches; it never adds, edits or deletes.
"""

from __future__ import annotations

from django.contrib import admin

from catalog.models import Category, Product


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Category)
class CategoryAdmin(ReadOnlyAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Product)
class ProductAdmin(ReadOnlyAdmin):
    list_display = ("name", "price", "quantity", "category_list", "updated_at")
    list_filter = ("categories",)
    search_fields = ("name", "categories__name")
    ordering = ("name",)

    def get_queryset(self, request):
        return super().get_queryset(request).prefetch_related("categories")

    @admin.display(description="Categories")
    def category_list(self, obj):
        return ", ".join(obj.category_names)

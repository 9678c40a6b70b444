# catalog/management/commands/import_stock.py

"""
Import a stock batch from a JSON file.

File format (JSON array, processed in order):
    [
        {"name": "Ryzen 7 7700X", "categories": ["CPU", "AMD"], "price": "329.00", "quantity": 10},
        ...
    ]

The whole file is one unit of work: either every line is applied or none.
"""

from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError
from rest_framework import serializers

from catalog.serializers import ImportLineSerializer, parse_lines
from catalog.services.exceptions import CatalogServiceError
from catalog.services.stock_import import import_stock


class Command(BaseCommand):
    help = "Import stock (create-or-update products by name) from a JSON file."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to a JSON array of import lines")

    def handle(self, *args, **options):
        path = options["path"]

        try:
            with open(path, encoding="utf-8") as fh:
                payload = json.load(fh)
        except OSError as exc:
            raise CommandError(f"Cannot read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CommandError(f"Invalid JSON in {path}: {exc}") from exc

        try:
            lines = parse_lines(ImportLineSerializer, payload, empty_message="No data provided.")
        except serializers.ValidationError as exc:
            raise CommandError(json.dumps(exc.detail, default=str)) from exc

        try:
            result = import_stock(lines)
        except CatalogServiceError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            f"Created products: {len(result.created_products)}, "
            f"updated products: {len(result.updated_products)}, "
            f"created categories: {len(result.created_categories)}"
        )
        self.stdout.write(self.style.SUCCESS("Stock imported successfully."))

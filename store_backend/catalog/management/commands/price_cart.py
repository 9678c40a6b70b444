# catalog/management/commands/price_cart.py

"""
Price a cart from a JSON file and print the discount breakdown.

File format (JSON array, priced in order):
    [{"product_id": "<uuid>", "quantity": 2}, ...]
"""

from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError
from rest_framework import serializers

from catalog.serializers import CartDiscountResultSerializer, CartLineSerializer, parse_lines
from catalog.services.discount import compute_discount


class Command(BaseCommand):
    help = "Price a cart with the bulk-category discount (read-only)."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to a JSON array of cart lines")

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
            lines = parse_lines(CartLineSerializer, payload, empty_message="Cart is empty.")
        except serializers.ValidationError as exc:
            raise CommandError(json.dumps(exc.detail, default=str)) from exc

        result = compute_discount(lines)
        if not result.ok:
            raise CommandError(result.message)

        data = CartDiscountResultSerializer(result).data
        self.stdout.write(json.dumps(data, indent=2))

        if result.skipped_product_ids:
            self.stderr.write(
                self.style.WARNING(
                    f"Skipped unknown products: {', '.join(data['skipped_product_ids'])}"
                )
            )

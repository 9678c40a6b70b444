# catalog/tests/test_commands.py

import json
import os
import tempfile
from decimal import Decimal
from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase

from catalog.models import Category, Product


class CommandTestMixin:
    def _write_json(self, payload):
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            if isinstance(payload, str):
                fh.write(payload)
            else:
                json.dump(payload, fh)
        self.addCleanup(os.remove, path)
        return path

    def _call(self, name, payload):
        out, err = StringIO(), StringIO()
        call_command(name, self._write_json(payload), stdout=out, stderr=err)
        return out.getvalue(), err.getvalue()


class ImportStockCommandTests(CommandTestMixin, TestCase):
    """
    GUARANTEES:
    - A valid file is imported and reported
    - Empty or malformed files fail without writes
    """

    def test_import_reports_success(self):
        out, _ = self._call(
            "import_stock",
            [
                {"name": "Ryzen 5 7600", "categories": ["CPU"], "price": "199.00", "quantity": 4},
                {"name": "B650 Board", "categories": ["Motherboard"], "price": "149.99", "quantity": 2},
            ],
        )

        self.assertIn("Created products: 2", out)
        self.assertIn("created categories: 2", out)
        self.assertIn("Stock imported successfully.", out)
        self.assertEqual(Product.objects.get(name="B650 Board").price, Decimal("149.99"))

    def test_empty_file_is_rejected(self):
        with self.assertRaisesMessage(CommandError, "No data provided."):
            self._call("import_stock", [])

    def test_invalid_json_is_rejected(self):
        with self.assertRaisesMessage(CommandError, "Invalid JSON"):
            self._call("import_stock", "[{not json")

    def test_invalid_line_rejects_whole_file(self):
        with self.assertRaises(CommandError):
            self._call(
                "import_stock",
                [
                    {"name": "Good", "categories": ["X"], "price": "1.00", "quantity": 1},
                    {"name": "Bad", "categories": ["X"], "price": "-5", "quantity": 1},
                ],
            )

        self.assertFalse(Product.objects.exists())
        self.assertFalse(Category.objects.exists())

    def test_stock_correction_below_zero_is_rejected(self):
        Product.objects.create(name="Fan", price=Decimal("9.00"), quantity=1)

        with self.assertRaisesMessage(CommandError, "cannot go below zero"):
            self._call(
                "import_stock",
                [{"name": "Fan", "categories": [], "price": "9.00", "quantity": -2}],
            )

        self.assertEqual(Product.objects.get(name="Fan").quantity, 1)

    def test_missing_file_is_reported(self):
        with self.assertRaisesMessage(CommandError, "Cannot read"):
            call_command("import_stock", "/nonexistent/stock.json", stdout=StringIO())


class PriceCartCommandTests(CommandTestMixin, TestCase):
    """
    GUARANTEES:
    - Output is JSON with decimal strings
    - Stock failures surface the customer-facing message
    """

    def setUp(self):
        cpu = Category.objects.create(name="CPU")
        self.p1 = Product.objects.create(name="Ryzen 9", price=Decimal("100.00"), quantity=5)
        self.p2 = Product.objects.create(name="Ryzen 5", price=Decimal("50.00"), quantity=1)
        self.p1.categories.set([cpu])
        self.p2.categories.set([cpu])

    def test_prints_breakdown_as_json(self):
        out, err = self._call(
            "price_cart",
            [
                {"product_id": str(self.p1.id), "quantity": 2},
                {"product_id": str(self.p2.id), "quantity": 1},
            ],
        )

        data = json.loads(out)
        self.assertEqual(data["total_before_discount"], "250.0000")
        self.assertEqual(data["total_discount"], "7.5000")
        self.assertEqual(data["final_price"], "242.5000")
        self.assertEqual(data["skipped_product_ids"], [])
        self.assertEqual(err, "")

    def test_unknown_product_is_warned_about(self):
        _, err = self._call(
            "price_cart",
            [{"product_id": "missing-product", "quantity": 1}],
        )

        self.assertIn("missing-product", err)

    def test_insufficient_stock_raises_message(self):
        with self.assertRaisesMessage(
            CommandError,
            "Not enough stock for Ryzen 5 (requested: 2, available: 1)",
        ):
            self._call("price_cart", [{"product_id": str(self.p2.id), "quantity": 2}])

    def test_empty_cart_is_rejected(self):
        with self.assertRaisesMessage(CommandError, "Cart is empty."):
            self._call("price_cart", [])

    def test_zero_quantity_is_rejected(self):
        with self.assertRaises(CommandError):
            self._call("price_cart", [{"product_id": str(self.p1.id), "quantity": 0}])

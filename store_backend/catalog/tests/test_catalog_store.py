# catalog/tests/test_catalog_store.py

import uuid
from decimal import Decimal
from unittest import mock

from django.db.models import QuerySet
from django.test import TestCase

from catalog.models import Category, Product
from catalog.services.catalog_store import CatalogStore
from catalog.services.types import ProductSnapshot


class CatalogStoreTests(TestCase):
    """
    GUARANTEES:
    - Batch reads return snapshots with categories populated
    - Staged records stay out of the database until commit()
    - commit() persists categories, products and their links together
    """

    def setUp(self):
        self.store = CatalogStore()
        self.cpu = Category.objects.create(name="CPU")
        self.product = Product.objects.create(name="Core i5", price=Decimal("199.00"), quantity=7)
        self.product.categories.set([self.cpu])

    def test_fetch_products_by_ids_returns_snapshots(self):
        snapshots = self.store.fetch_products_by_ids([self.product.id])

        self.assertEqual(
            snapshots,
            [
                ProductSnapshot(
                    id=self.product.id,
                    name="Core i5",
                    price=Decimal("199.00"),
                    quantity=7,
                    category_names=("CPU",),
                )
            ],
        )

    def test_fetch_products_by_ids_ignores_malformed_ids(self):
        with self.assertNumQueries(0):
            self.assertEqual(self.store.fetch_products_by_ids(["nope", None]), [])

        self.assertEqual(self.store.fetch_products_by_ids([uuid.uuid4()]), [])

    def test_lookups_by_name_are_exact(self):
        self.assertEqual(self.store.fetch_product_by_name("Core i5"), self.product)
        self.assertIsNone(self.store.fetch_product_by_name("core i5"))
        self.assertEqual(self.store.fetch_category_by_name("CPU"), self.cpu)
        self.assertIsNone(self.store.fetch_category_by_name("GPU"))

    def test_staged_records_are_not_visible_before_commit(self):
        gpu = self.store.create_category("GPU")
        product = self.store.create_product(name="RTX 4060", price=Decimal("299.00"), quantity=2)
        self.store.stage_product(product, [gpu])

        self.assertTrue(self.store.has_pending)
        self.assertFalse(Category.objects.filter(name="GPU").exists())
        self.assertFalse(Product.objects.filter(name="RTX 4060").exists())

        self.store.commit()

        saved = Product.objects.get(name="RTX 4060")
        self.assertEqual([c.name for c in saved.categories.all()], ["GPU"])
        self.assertEqual(saved.description, "")
        self.assertFalse(self.store.has_pending)

    def test_discard_drops_staged_records(self):
        self.store.create_category("Discarded")
        self.store.discard()
        self.store.commit()

        self.assertFalse(Category.objects.filter(name="Discarded").exists())

    def test_commit_with_nothing_staged_is_a_no_op(self):
        with self.assertNumQueries(0):
            self.store.commit()

    def test_locking_lookup_selects_for_update(self):
        with mock.patch.object(
            QuerySet, "select_for_update", autospec=True, side_effect=lambda qs, **kwargs: qs
        ) as select_for_update:
            locked = self.store.fetch_product_by_name("Core i5", for_update=True)
            plain = self.store.fetch_product_by_name("Core i5")

        select_for_update.assert_called_once()
        self.assertEqual(locked, self.product)
        self.assertEqual(plain, self.product)

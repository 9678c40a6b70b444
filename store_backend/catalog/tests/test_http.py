# catalog/tests/test_http.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from catalog.models import Category, Product


class HealthCheckTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_reports_ok_with_catalog_counts(self):
        cpu = Category.objects.create(name="CPU")
        product = Product.objects.create(name="Ryzen 5", price=Decimal("50.00"), quantity=1)
        product.categories.set([cpu])

        response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"status": "ok", "db": "ok", "catalog": {"products": 1, "categories": 1}},
        )

    def test_is_public(self):
        response = self.client.get("/api/health/")
        self.assertEqual(response.status_code, 200)


class CatalogAdminTests(TestCase):
    """
    GUARANTEES:
    - Staff can list catalog rows
    - Nobody can add rows through the admin
    """

    def setUp(self):
        user = get_user_model().objects.create_superuser(
            username="admin", email="admin@example.com", password="pass12345"
        )
        self.client.force_login(user)
        Product.objects.create(name="Core i7", price=Decimal("300.00"), quantity=2)

    def test_product_changelist_renders(self):
        response = self.client.get(reverse("admin:catalog_product_changelist"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Core i7")

    def test_add_is_forbidden(self):
        response = self.client.get(reverse("admin:catalog_product_add"))
        self.assertEqual(response.status_code, 403)

# catalog/tests/test_settings.py

import importlib
import os
import sys
from unittest import mock

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase


def _load_prod_settings():
    sys.modules.pop("backend.settings.prod", None)
    try:
        return importlib.import_module("backend.settings.prod")
    finally:
        sys.modules.pop("backend.settings.prod", None)


class ProductionSettingsTests(SimpleTestCase):
    """
    GUARANTEES:
    - Production refuses to start without a real SECRET_KEY
    - Production refuses SQLite (import_stock needs row locks)
    """

    def test_missing_secret_key_is_refused(self):
        with mock.patch.dict(os.environ, {"SECRET_KEY": ""}):
            with self.assertRaisesMessage(ImproperlyConfigured, "SECRET_KEY"):
                _load_prod_settings()

    def test_sqlite_database_is_refused(self):
        env = {
            "SECRET_KEY": "a-real-production-secret",
            "ALLOWED_HOSTS": "store.example.com",
            "DATABASE_URL": "sqlite:///prod.sqlite3",
        }
        with mock.patch.dict(os.environ, env):
            with self.assertRaisesMessage(ImproperlyConfigured, "SQLite"):
                _load_prod_settings()

# catalog/services/exceptions.py

"""
CATALOG SERVICE ERRORS

Centralized domain errors for pricing + stock import services.

Business outcomes (insufficient stock) are NOT exceptions; they come back
as CartDiscountResult.message. Only invalid input and infrastructure
failures are raised.
"""


class CatalogServiceError(Exception):
    """Base exception for all catalog service failures."""


class InvalidLineError(CatalogServiceError, ValueError):
    """Raised when a cart or import line carries an unusable value."""


class StockImportError(CatalogServiceError):
    """Raised when a stock import batch cannot be processed."""


class EmptyImportError(StockImportError):
    """Raised when an import batch has no lines."""


class CatalogPersistenceError(CatalogServiceError):
    """Raised when the catalog unit of work fails to commit."""

from .discount import compute_discount
from .inventory import validate_stock
from .stock_import import import_stock

__all__ = [
    "compute_discount",
    "validate_stock",
    "import_stock",
]

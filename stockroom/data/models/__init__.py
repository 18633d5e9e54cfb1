from .data_filters import ProductFilters

from .products import (
    DEFAULT_LOW_STOCK_AT,
    ProductCreate,
    ProductRecord,
    StockLevel,
)
from .list_response import ProductPage
from .summary import (
    ELLIPSIS,
    InventorySummary,
    PageToken,
    PageWindow,
    WeeklyBucket,
)

__all__ = [
    # Filter classes
    "ProductFilters",
    # Product models
    "DEFAULT_LOW_STOCK_AT",
    "ProductCreate",
    "ProductRecord",
    "StockLevel",
    # List response models
    "ProductPage",
    # Derived view models
    "ELLIPSIS",
    "InventorySummary",
    "PageToken",
    "PageWindow",
    "WeeklyBucket",
]

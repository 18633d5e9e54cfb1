# stockroom/data/interface.py
from __future__ import annotations

from typing import List, Protocol

from .models import (
    # Filter classes
    ProductFilters,
    # Product models
    ProductCreate,
    ProductRecord,
    # List response models
    ProductPage,
)


# ---- Data access protocol ----

class DataAccess(Protocol):
    """
    Backend-agnostic contract for the Streamlit UI.

    - Every method is scoped to a single user; callers pass the id resolved by
      the authentication layer and implementations never return other users' rows.
    - Implementations MUST avoid result caching inside these methods.
      Each call should execute a fresh query against the underlying source.
    """

    # Product table queries

    def count_products(self, filters: ProductFilters) -> int:
        """Count the user's products matching the name filter (pagination ignored)."""
        ...

    def list_products(self, filters: ProductFilters) -> ProductPage:
        """Get one page of the user's products, newest first."""
        ...

    # Dashboard queries

    def get_all_products(self, user_id: str) -> List[ProductRecord]:
        """Get every product the user owns, unfiltered."""
        ...

    def get_recent_products(self, user_id: str, limit: int = 5) -> List[ProductRecord]:
        """Get the user's most recently created products."""
        ...

    def count_flagged_low_stock(self, user_id: str, max_quantity: int = 5) -> int:
        """Count products with an explicit low-stock threshold and at most `max_quantity` units."""
        ...

    # Mutations

    def create_product(self, user_id: str, payload: ProductCreate) -> ProductRecord:
        """Store a new product for the user."""
        ...

    def delete_product(self, user_id: str, product_id: str) -> int:
        """Delete a product owned by the user; returns rows affected (0 when not owned)."""
        ...

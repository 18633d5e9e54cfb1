from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .products import ProductRecord


class ProductPage(BaseModel):
    """One page of the product table, newest first."""
    items: List[ProductRecord] = Field(description="Products on this page")
    page: int = Field(description="1-based page number")
    page_size: int = Field(description="Rows per page")

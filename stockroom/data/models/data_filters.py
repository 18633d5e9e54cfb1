from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ProductFilters(BaseModel):
    """Filters for the product table."""
    user_id: str = Field(description="Owning user; every query is scoped to it")
    name_contains: Optional[str] = Field(default=None, description="Case-insensitive substring match on the product name")
    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(default=5, ge=1, description="Rows per page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

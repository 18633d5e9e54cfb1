from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_LOW_STOCK_AT = 5


class StockLevel(str, Enum):
    """Per-product stock classification."""
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


class ProductRecord(BaseModel):
    """A stored product, as handed out by the persistence layer."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique product identifier")
    user_id: str = Field(description="Owning user identifier")
    name: str = Field(description="Product name")
    sku: Optional[str] = Field(default=None, description="Stock keeping unit code")
    price: Decimal = Field(description="Unit price")
    quantity: int = Field(description="Units on hand")
    low_stock_at: Optional[int] = Field(default=None, description="Low-stock threshold, defaults to 5 when unset")
    created_at: datetime = Field(description="Creation timestamp")


class ProductCreate(BaseModel):
    """Validated input for creating a product.

    Form values arrive as strings, so numbers are coerced; blank optional fields
    are treated as absent.
    """
    name: str = Field(min_length=1, description="Product name")
    price: Decimal = Field(ge=0, description="Unit price")
    quantity: int = Field(ge=0, description="Units on hand")
    sku: Optional[str] = Field(default=None, description="Stock keeping unit code")
    low_stock_at: Optional[int] = Field(default=None, ge=0, description="Low-stock threshold")

    @field_validator("sku", "low_stock_at", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("name", "price", "quantity", mode="before")
    @classmethod
    def _strip_strings(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

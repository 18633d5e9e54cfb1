from __future__ import annotations

from decimal import Decimal
from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


ELLIPSIS = "..."

PageToken = Union[int, Literal["..."]]


class WeeklyBucket(BaseModel):
    """Number of products created in one 7-day window."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(description="Window start as MM/DD")
    count: int = Field(description="Products created inside the window")


class InventorySummary(BaseModel):
    """Dashboard totals computed from a user's full product list."""
    model_config = ConfigDict(frozen=True)

    total_count: int
    total_value: Decimal
    in_stock_count: int
    low_stock_count: int
    out_of_stock_count: int
    in_stock_pct: int
    low_stock_pct: int
    out_of_stock_pct: int
    weekly_series: List[WeeklyBucket]


class PageWindow(BaseModel):
    """Page labels to render in a pagination bar."""
    model_config = ConfigDict(frozen=True)

    tokens: List[PageToken]
    current_page: int
    total_pages: int
    has_previous: bool
    has_next: bool

    @property
    def should_render(self) -> bool:
        return self.total_pages > 1

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from ..config import get_config
from ..core.pagination import compute_window
from ..data.interface import DataAccess
from ..data.models import PageWindow, ProductFilters, ProductRecord
from ..logging import get_logger


class InventoryQuery(BaseModel):
    """Search text and page number taken from the request's query string."""
    model_config = ConfigDict(frozen=True)

    q: str = ""
    page: int = 1


class InventoryView(BaseModel):
    """Everything the inventory page renders."""
    model_config = ConfigDict(frozen=True)

    query: InventoryQuery
    items: List[ProductRecord]
    total_count: int
    page_size: int
    window: PageWindow
    # query parameters every pagination link keeps
    nav_params: Dict[str, str]


def parse_query(params: Mapping[str, Any]) -> InventoryQuery:
    """Read `q` and `page` from query parameters.

    `q` is trimmed; `page` is clamped to at least 1 and falls back to 1 when it
    is missing or not a number.
    """
    q = str(params.get("q") or "").strip()
    try:
        page = int(str(params.get("page") or 1).strip())
    except ValueError:
        page = 1
    return InventoryQuery(q=q, page=max(1, page))


def total_pages_for(total_count: int, page_size: int) -> int:
    return max(1, math.ceil(total_count / page_size))


def load_inventory_page(
    da: DataAccess,
    user_id: str,
    query: InventoryQuery,
    page_size: Optional[int] = None,
    radius: Optional[int] = None,
) -> InventoryView:
    config = get_config()
    page_size = page_size or config.page_size
    radius = config.page_radius if radius is None else radius

    filters = ProductFilters(
        user_id=user_id,
        name_contains=query.q or None,
        page=query.page,
        page_size=page_size,
    )
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="inventory") as pool:
        f_count = pool.submit(da.count_products, filters)
        f_page = pool.submit(da.list_products, filters)
        total_count = f_count.result()
        page = f_page.result()

    total_pages = total_pages_for(total_count, page_size)
    get_logger(__name__).debug(
        f"Inventory page {query.page}/{total_pages} for {user_id} (q={query.q!r}, {total_count} matches)"
    )
    return InventoryView(
        query=query,
        items=page.items,
        total_count=total_count,
        page_size=page_size,
        window=compute_window(query.page, total_pages, radius),
        nav_params={"q": query.q, "pageSize": str(page_size)},
    )

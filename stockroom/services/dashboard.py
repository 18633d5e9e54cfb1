"""
Dashboard request handler.

The three independent reads are issued concurrently, then the full product list
is reduced in-process by the aggregator.
"""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict

from ..config import get_config
from ..core.aggregator import aggregate, classify
from ..data.interface import DataAccess
from ..data.models import InventorySummary, ProductFilters, ProductRecord, StockLevel
from ..logging import get_logger

T = TypeVar("T")


class RecentProduct(BaseModel):
    """A recently created product with its stock level."""
    model_config = ConfigDict(frozen=True)

    product: ProductRecord
    level: StockLevel


class DashboardView(BaseModel):
    """Everything the dashboard page renders."""
    model_config = ConfigDict(frozen=True)

    total_products: int
    # low_stock_at set and quantity <= 5; differs from summary.low_stock_count
    flagged_low_stock: int
    summary: InventorySummary
    recent: List[RecentProduct]
    timings_ms: Dict[str, float]


def timed(fn: Callable[[], T]) -> Tuple[T, float]:
    """Run `fn` and return its result with the elapsed milliseconds."""
    t0 = time.perf_counter()
    result = fn()
    return result, (time.perf_counter() - t0) * 1000.0


def load_dashboard(da: DataAccess, user_id: str, now: Optional[datetime] = None) -> DashboardView:
    config = get_config()
    logger = get_logger(__name__)

    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="dashboard") as pool:
        f_total = pool.submit(timed, lambda: da.count_products(ProductFilters(user_id=user_id)))
        f_flagged = pool.submit(
            timed, lambda: da.count_flagged_low_stock(user_id, config.low_stock_metric_max_quantity)
        )
        f_all = pool.submit(timed, lambda: da.get_all_products(user_id))
        total_products, t_total = f_total.result()
        flagged, t_flagged = f_flagged.result()
        all_products, t_all = f_all.result()

    summary, t_aggregate = timed(lambda: aggregate(all_products, now=now))
    recent, t_recent = timed(lambda: da.get_recent_products(user_id, config.recent_products_limit))

    logger.debug(f"Inventory value for {user_id}: {summary.total_value}")

    return DashboardView(
        total_products=total_products,
        flagged_low_stock=flagged,
        summary=summary,
        recent=[RecentProduct(product=p, level=classify(p)) for p in recent],
        timings_ms={
            "count_products": round(t_total, 2),
            "count_flagged_low_stock": round(t_flagged, 2),
            "get_all_products": round(t_all, 2),
            "aggregate": round(t_aggregate, 2),
            "get_recent_products": round(t_recent, 2),
        },
    )

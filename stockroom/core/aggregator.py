"""
Dashboard aggregation over a user's full product list.

Everything here is a pure function of its inputs: the request handler fetches the
records, this module reduces them into an `InventorySummary`.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

from ..data.models import (
    DEFAULT_LOW_STOCK_AT,
    InventorySummary,
    ProductRecord,
    StockLevel,
    WeeklyBucket,
)

WEEKS_IN_SERIES = 12

_END_OF_DAY = time(23, 59, 59, 999000)


def classify(record: ProductRecord, default_threshold: int = DEFAULT_LOW_STOCK_AT) -> StockLevel:
    """Classify a product as out of stock, low stock or in stock.

    The threshold is inclusive: a product with exactly `low_stock_at` units is low.
    """
    threshold = record.low_stock_at if record.low_stock_at is not None else default_threshold
    if record.quantity == 0:
        return StockLevel.OUT_OF_STOCK
    if record.quantity <= threshold:
        return StockLevel.LOW_STOCK
    return StockLevel.IN_STOCK


def percentage(count: int, total: int) -> int:
    """`count / total` as a whole percentage, rounded half-up; 0 when total is 0."""
    if total <= 0:
        return 0
    exact = Decimal(count * 100) / Decimal(total)
    return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _is_local_clock(anchor: datetime) -> bool:
    # A fixed-offset anchor matching the local clock (what `astimezone()` returns)
    # stands for local time, so each day gets its own offset across DST changes.
    return isinstance(anchor.tzinfo, timezone) and anchor.astimezone().utcoffset() == anchor.utcoffset()


def _to_anchor_zone(ts: datetime, anchor: datetime) -> datetime:
    # Naive timestamps are wall-clock time in the anchor's zone; a naive anchor
    # is local time.
    if ts.tzinfo is None:
        if _is_local_clock(anchor):
            return ts.astimezone()
        return ts.replace(tzinfo=anchor.tzinfo)
    if anchor.tzinfo is None:
        return ts.astimezone().replace(tzinfo=None)
    return ts.astimezone(anchor.tzinfo)


def _at(day, clock: time, anchor: datetime) -> datetime:
    if _is_local_clock(anchor):
        return datetime.combine(day, clock).astimezone()
    return datetime.combine(day, clock, tzinfo=anchor.tzinfo)


def week_windows(now: datetime, weeks: int = WEEKS_IN_SERIES) -> List[tuple[datetime, datetime]]:
    """Return `(start, end)` for each weekly window, oldest first.

    Window `i` starts `i * 7` days before `now` at local midnight and ends six
    days later at 23:59:59.999.
    """
    windows = []
    for i in range(weeks - 1, -1, -1):
        start_day = (now - timedelta(days=i * 7)).date()
        start = _at(start_day, time.min, now)
        end = _at(start_day + timedelta(days=6), _END_OF_DAY, now)
        windows.append((start, end))
    return windows


def build_weekly_series(
    timestamps: Iterable[datetime],
    now: datetime,
    weeks: int = WEEKS_IN_SERIES,
) -> List[WeeklyBucket]:
    """Count creation timestamps per weekly window.

    Timestamps older than the first window are not counted anywhere.
    """
    stamps = [_to_anchor_zone(ts, now) for ts in timestamps]
    series = []
    for start, end in week_windows(now, weeks):
        count = sum(1 for ts in stamps if start <= ts <= end)
        series.append(WeeklyBucket(label=f"{start.month:02d}/{start.day:02d}", count=count))
    return series


def aggregate(records: Sequence[ProductRecord], now: Optional[datetime] = None) -> InventorySummary:
    """Compute dashboard totals, stock-level breakdown and the weekly series."""
    if now is None:
        now = datetime.now().astimezone()

    total = len(records)
    total_value = sum((r.price * r.quantity for r in records), Decimal(0))

    counts = {level: 0 for level in StockLevel}
    for record in records:
        counts[classify(record)] += 1

    return InventorySummary(
        total_count=total,
        total_value=total_value,
        in_stock_count=counts[StockLevel.IN_STOCK],
        low_stock_count=counts[StockLevel.LOW_STOCK],
        out_of_stock_count=counts[StockLevel.OUT_OF_STOCK],
        in_stock_pct=percentage(counts[StockLevel.IN_STOCK], total),
        low_stock_pct=percentage(counts[StockLevel.LOW_STOCK], total),
        out_of_stock_pct=percentage(counts[StockLevel.OUT_OF_STOCK], total),
        weekly_series=build_weekly_series((r.created_at for r in records), now),
    )

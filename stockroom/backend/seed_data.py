#!/usr/bin/env python3
"""
seed_data.py

Generates realistic fake products to `products.csv` under a local folder
(default: sample_data), so the dashboard and inventory table have something
to show during local development.

Products are spread over the last few weeks so the weekly chart is populated,
with a mix of healthy, low and empty stock.

Run:
  python -m stockroom.backend.seed_data --user demo@example.com --products 40 --weeks 16
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import string
import sys
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from stockroom.config import get_config
from stockroom.data.backends.csv_backend import COLUMNS, PRODUCTS_FILE

# -----------------------------
# Config & helper structures
# -----------------------------

CATEGORIES = {
    "Beverages": ["SparkleCo", "H2Only", "BeanWorks", "Leaf&Lime"],
    "Snacks": ["CrunchLabs", "NuttyBuddy", "SweetTreats", "SaltyWave"],
    "Household": ["HomeGuard", "ShinePro", "EcoClean", "FreshNest"],
    "Personal Care": ["GlowCare", "PureForm", "DailyZen", "Wellness+"],
    "Produce": ["GreenFields", "SunValley", "OrchardPrime"],
    "Frozen": ["ArcticBite", "FrostyFarm", "CoolCuisine"],
}

# (weight, quantity range) per stock profile
STOCK_PROFILES = {
    "empty": (0.1, (0, 0)),
    "low": (0.25, (1, 5)),
    "healthy": (0.65, (6, 120)),
}


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def rand_sku(rnd: random.Random) -> str:
    return "".join(rnd.choices(string.ascii_uppercase + string.digits, k=8))

def price_round(p: float) -> Decimal:
    return Decimal(str(round(max(p, 0.01), 2)))

def pick_quantity(rnd: random.Random) -> int:
    names = list(STOCK_PROFILES)
    weights = [STOCK_PROFILES[n][0] for n in names]
    low, high = STOCK_PROFILES[rnd.choices(names, weights=weights)[0]][1]
    return rnd.randint(low, high)


# -----------------------------
# Core generators
# -----------------------------

def gen_products(
    user_id: str,
    n: int,
    weeks: int,
    now: datetime,
    rnd: random.Random,
) -> List[Dict]:
    products = []
    for _ in range(n):
        category = rnd.choice(list(CATEGORIES))
        brand = rnd.choice(CATEGORIES[category])
        created = now - timedelta(
            days=rnd.randint(0, max(0, weeks * 7 - 1)),
            minutes=rnd.randint(0, 24 * 60 - 1),
        )
        products.append({
            "id": uuid.UUID(int=rnd.getrandbits(128), version=4).hex,
            "user_id": user_id,
            "name": f"{brand} {category} {rnd.randint(10, 999)}",
            # roughly a third of products carry no SKU / explicit threshold
            "sku": rand_sku(rnd) if rnd.random() < 0.7 else "",
            "price": price_round(rnd.uniform(1.0, 30.0) * rnd.choice([0.99, 0.95, 0.9, 1.0])),
            "quantity": pick_quantity(rnd),
            "low_stock_at": rnd.choice([3, 5, 10, 15]) if rnd.random() < 0.6 else "",
            "created_at": created.isoformat(),
        })
    products.sort(key=lambda p: p["created_at"])
    return products


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate fake products to products.csv.")
    parser.add_argument("--user", action="append", dest="users",
                        help="Owning user id; repeat for several users (defaults to DEFAULT_USER_ID).")
    parser.add_argument("--products", type=int, default=config.default_seed_products, help="Products per user.")
    parser.add_argument("--weeks", type=int, default=config.default_seed_weeks, help="Spread creation dates over this many weeks.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if products.csv already exists.")
    args = parser.parse_args(argv)

    users = args.users or ([config.default_user_id] if config.default_user_id else [])
    if not users:
        print("No user given: pass --user or set DEFAULT_USER_ID.", file=sys.stderr)
        return 2

    outdir = args.output_dir
    ensure_dir(outdir)
    path = os.path.join(outdir, PRODUCTS_FILE)
    if args.no_overwrite and os.path.exists(path):
        print(f"Refusing to overwrite existing file: {path}", file=sys.stderr)
        return 2

    rnd = random.Random(args.seed)
    now = datetime.now(timezone.utc)
    rows: List[Dict] = []
    for user_id in users:
        rows.extend(gen_products(user_id, args.products, args.weeks, now, rnd))

    write_csv(path, rows, COLUMNS)

    # simple summary
    print(f"Generated data in {outdir}")
    print(f" users: {len(users)} | products: {len(rows)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

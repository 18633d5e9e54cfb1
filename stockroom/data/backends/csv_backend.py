from __future__ import annotations

import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import List

import pandas as pd

from ..interface import DataAccess
from ..models import ProductCreate, ProductFilters, ProductPage, ProductRecord
from ...config import get_config
from ...logging import get_logger

PRODUCTS_FILE = "products.csv"

COLUMNS = ["id", "user_id", "name", "sku", "price", "quantity", "low_stock_at", "created_at"]

# One writer at a time across every CsvDataAccess in the process.
_WRITE_LOCK = threading.Lock()


class CsvDataAccess(DataAccess):
    """
    CSV-backed implementation.
    - Products live in `<data_dir>/products.csv`, created with a header when missing.
    - Every method call re-reads the file and performs a fresh filter pass
      (so each UI interaction triggers new work, mirroring a DB query).
    - Writes replace the file atomically under a process-wide lock.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)
        self.logger = get_logger(__name__)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            self.data_dir = (repo_root or current) / self.data_dir

        self.path = self.data_dir / PRODUCTS_FILE
        if not self.path.exists():
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self._write(pd.DataFrame(columns=COLUMNS))
            self.logger.info(f"Created empty product file at {self.path}")

    # ---------- loading / writing helpers ----------

    def _read(self) -> pd.DataFrame:
        try:
            df = pd.read_csv(
                self.path,
                dtype={"id": str, "user_id": str, "name": str, "sku": str, "price": str},
                keep_default_na=False,
                na_values={"sku": [""], "low_stock_at": [""]},
            )
            df["quantity"] = df["quantity"].astype("int64")
            df["low_stock_at"] = df["low_stock_at"].astype("Int64")
            df["created_at"] = pd.to_datetime(df["created_at"], utc=True, format="ISO8601")
        except Exception as e:
            raise RuntimeError(
                f"Error reading {self.path}: {e}\n"
                f"Please check that the CSV file is valid and readable."
            ) from e
        return df

    def _write(self, df: pd.DataFrame) -> None:
        out = df[COLUMNS].copy()
        if not out.empty:
            out["created_at"] = out["created_at"].map(lambda ts: ts.isoformat())
        fd, tmp = tempfile.mkstemp(dir=self.data_dir, prefix=".products-", suffix=".csv")
        try:
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as fh:
                out.to_csv(fh, index=False)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    @staticmethod
    def _to_record(row: dict) -> ProductRecord:
        return ProductRecord(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            sku=None if pd.isna(row["sku"]) else row["sku"],
            price=Decimal(row["price"]),
            quantity=int(row["quantity"]),
            low_stock_at=None if pd.isna(row["low_stock_at"]) else int(row["low_stock_at"]),
            created_at=row["created_at"].to_pydatetime(),
        )

    def _to_records(self, df: pd.DataFrame) -> List[ProductRecord]:
        return [self._to_record(row) for row in df.to_dict("records")]

    # ---------- contract helpers ----------

    def _user_rows(self, user_id: str) -> pd.DataFrame:
        df = self._read()
        return df[df["user_id"] == user_id]

    def _filtered_rows(self, filters: ProductFilters) -> pd.DataFrame:
        df = self._user_rows(filters.user_id)
        if filters.name_contains and filters.name_contains.strip():
            s = filters.name_contains.strip()
            df = df[df["name"].str.contains(s, case=False, regex=False, na=False)]
        return df

    @staticmethod
    def _newest_first(df: pd.DataFrame) -> pd.DataFrame:
        return df.sort_values("created_at", ascending=False, kind="stable")

    # ---------- interface implementation ----------

    def count_products(self, filters: ProductFilters) -> int:
        return int(len(self._filtered_rows(filters)))

    def list_products(self, filters: ProductFilters) -> ProductPage:
        df = self._newest_first(self._filtered_rows(filters))
        df = df.iloc[filters.offset:filters.offset + filters.page_size]
        return ProductPage(items=self._to_records(df), page=filters.page, page_size=filters.page_size)

    def get_all_products(self, user_id: str) -> List[ProductRecord]:
        return self._to_records(self._user_rows(user_id))

    def get_recent_products(self, user_id: str, limit: int = 5) -> List[ProductRecord]:
        df = self._newest_first(self._user_rows(user_id)).head(int(limit))
        return self._to_records(df)

    def count_flagged_low_stock(self, user_id: str, max_quantity: int = 5) -> int:
        df = self._user_rows(user_id)
        mask = df["low_stock_at"].notna() & (df["quantity"] <= max_quantity)
        return int(mask.sum())

    def create_product(self, user_id: str, payload: ProductCreate) -> ProductRecord:
        record = ProductRecord(
            id=uuid.uuid4().hex,
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
            **payload.model_dump(),
        )
        row = record.model_dump()
        row["price"] = str(record.price)
        with _WRITE_LOCK:
            df = self._read()
            new_row = pd.DataFrame([row], columns=COLUMNS)
            new_row["created_at"] = pd.to_datetime(new_row["created_at"], utc=True)
            df = new_row if df.empty else pd.concat([df, new_row], ignore_index=True)
            self._write(df)
        return record

    def delete_product(self, user_id: str, product_id: str) -> int:
        with _WRITE_LOCK:
            df = self._read()
            mask = (df["id"] == product_id) & (df["user_id"] == user_id)
            deleted = int(mask.sum())
            if deleted:
                self._write(df[~mask])
        return deleted

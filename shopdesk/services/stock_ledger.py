from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from shopdesk.db import q, rowcount, x
from shopdesk.services.items import StockUnit, parse_unit
from shopdesk.utils import iso_now, parse_iso_date, to_quantity

logger = logging.getLogger(__name__)


class StockKind(str, Enum):
    OPENING = "opening"
    CLOSING = "closing"

    @property
    def table(self) -> str:
        return "opening_stock" if self is StockKind.OPENING else "closing_stock"


@dataclass(frozen=True)
class StockEntry:
    id: int
    date: str
    item_id: int
    item_name: str
    quantity: float
    unit: StockUnit
    created_at: str = ""

    @classmethod
    def from_row(cls, r) -> "StockEntry":
        return cls(
            id=int(r["id"]),
            date=str(r["date"]),
            item_id=int(r["item_id"]),
            item_name=str(r["item_name"]),
            quantity=float(r["quantity"]),
            unit=StockUnit(str(r["unit"])),
            created_at=str(r["created_at"] or ""),
        )


def _kind(kind) -> StockKind:
    try:
        return StockKind(kind)
    except ValueError:
        raise ValueError("Invalid stock kind. Use 'opening' or 'closing'.")


def list_stock_entries(conn, kind, entry_date) -> list[StockEntry]:
    """Entries for one date, oldest first so a later duplicate wins the report merge."""
    k = _kind(kind)
    rows = q(
        conn,
        f"SELECT * FROM {k.table} WHERE date=? ORDER BY created_at ASC, id ASC",
        (parse_iso_date(entry_date),),
    )
    return [StockEntry.from_row(r) for r in rows]


def get_stock_entry(conn, kind, entry_id: int) -> Optional[StockEntry]:
    k = _kind(kind)
    rows = q(conn, f"SELECT * FROM {k.table} WHERE id=?", (int(entry_id),))
    return StockEntry.from_row(rows[0]) if rows else None


def create_stock_entry(
    conn,
    kind,
    *,
    entry_date,
    item_id: int,
    item_name: str,
    quantity,
    unit,
) -> int:
    k = _kind(kind)
    if item_id is None or str(item_id).strip() == "":
        raise ValueError("Item is required.")
    item_name = str(item_name or "").strip()
    if not item_name:
        raise ValueError("Item name is required.")

    d = parse_iso_date(entry_date)
    qty = to_quantity(quantity)
    u = parse_unit(unit)

    entry_id = x(
        conn,
        f"""
        INSERT INTO {k.table} (date, item_id, item_name, quantity, unit, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (d, int(item_id), item_name, qty, u.value, iso_now()),
    )
    logger.info("Created %s stock entry %s: %s %.3f %s on %s", k.value, entry_id, item_name, qty, u.value, d)
    return int(entry_id)


def update_stock_entry(conn, kind, entry_id: int, *, quantity, unit) -> Optional[StockEntry]:
    """Only quantity and unit are editable; date and item stay fixed."""
    k = _kind(kind)
    qty = to_quantity(quantity)
    u = parse_unit(unit)

    n = rowcount(
        conn,
        f"UPDATE {k.table} SET quantity=?, unit=? WHERE id=?",
        (qty, u.value, int(entry_id)),
    )
    if n == 0:
        raise ValueError(f"{k.value.capitalize()} stock entry not found.")

    logger.info("Updated %s stock entry %s: %.3f %s", k.value, entry_id, qty, u.value)
    return get_stock_entry(conn, k, entry_id)


def delete_stock_entry(conn, kind, entry_id: int) -> None:
    k = _kind(kind)
    n = rowcount(conn, f"DELETE FROM {k.table} WHERE id=?", (int(entry_id),))
    if n == 0:
        raise ValueError(f"{k.value.capitalize()} stock entry not found.")
    logger.info("Deleted %s stock entry %s", k.value, entry_id)

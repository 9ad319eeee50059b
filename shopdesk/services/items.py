from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from shopdesk.db import q, x
from shopdesk.utils import iso_now

logger = logging.getLogger(__name__)


class SaleType(str, Enum):
    """How an item is transacted. Values are the labels stored on items and order lines."""

    PER_WEIGHT = "Per KG"
    PER_PIECE = "Per PCS"


class StockUnit(str, Enum):
    PCS = "PCS"
    KG = "KG"


_SALE_TYPE_ALIASES = {
    "PERKG": SaleType.PER_WEIGHT,
    "PERWEIGHT": SaleType.PER_WEIGHT,
    "PERPCS": SaleType.PER_PIECE,
    "PERPIECE": SaleType.PER_PIECE,
}


def parse_sale_type(value) -> Optional[SaleType]:
    """Lenient lookup: "Per PCS", "PerPiece" and "per_piece" all resolve. Unknown -> None."""
    if value is None:
        return None
    if isinstance(value, SaleType):
        return value
    key = str(value).upper().replace(" ", "").replace("_", "").replace("-", "")
    return _SALE_TYPE_ALIASES.get(key)


def parse_unit(value) -> StockUnit:
    if isinstance(value, StockUnit):
        return value
    u = str(value or "").strip().upper()
    if u in {"PCS", "KG"}:
        return StockUnit(u)
    raise ValueError("Invalid unit. Use 'PCS' or 'KG'.")


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    sale_type: SaleType
    weight_per_pcs: Optional[float] = None
    price_per_kg: Optional[float] = None
    price_per_pcs: Optional[float] = None

    @property
    def default_unit(self) -> StockUnit:
        return StockUnit.PCS if self.sale_type == SaleType.PER_PIECE else StockUnit.KG

    @classmethod
    def from_row(cls, r) -> "Item":
        return cls(
            id=int(r["id"]),
            name=str(r["name"]),
            sale_type=parse_sale_type(r["sale_type"]) or SaleType.PER_WEIGHT,
            weight_per_pcs=float(r["weight_per_pcs"]) if r["weight_per_pcs"] is not None else None,
            price_per_kg=float(r["price_per_kg"]) if r["price_per_kg"] is not None else None,
            price_per_pcs=float(r["price_per_pcs"]) if r["price_per_pcs"] is not None else None,
        )


def list_items(conn) -> list[Item]:
    return [Item.from_row(r) for r in q(conn, "SELECT * FROM items ORDER BY name")]


def get_item(conn, item_id: int) -> Optional[Item]:
    rows = q(conn, "SELECT * FROM items WHERE id=?", (int(item_id),))
    return Item.from_row(rows[0]) if rows else None


def _optional_positive(value, label: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number.")
    if v <= 0:
        raise ValueError(f"{label} must be > 0.")
    return v


def create_item(
    conn,
    *,
    name: str,
    sale_type,
    weight_per_pcs: Optional[float] = None,
    price_per_kg: Optional[float] = None,
    price_per_pcs: Optional[float] = None,
) -> int:
    name = str(name or "").strip()
    if not name:
        raise ValueError("Item name is required.")

    st_ = parse_sale_type(sale_type)
    if st_ is None:
        raise ValueError("Invalid sale type. Use 'Per KG' or 'Per PCS'.")

    wpp = _optional_positive(weight_per_pcs, "Weight per piece")
    if st_ == SaleType.PER_PIECE and wpp is None:
        # Sales still count in pieces; the KG equivalent just won't be derived.
        logger.warning("Per-piece item %r has no weight per piece", name)

    item_id = x(
        conn,
        """
        INSERT INTO items (name, sale_type, weight_per_pcs, price_per_kg, price_per_pcs, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            name,
            st_.value,
            wpp,
            _optional_positive(price_per_kg, "Price per kg"),
            _optional_positive(price_per_pcs, "Price per piece"),
            iso_now(),
        ),
    )
    return int(item_id)

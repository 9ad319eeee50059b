from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shopdesk.db import q, x
from shopdesk.services.order_items import OrderLineEntry, encode_order_items
from shopdesk.utils import iso_now, parse_iso_date


@dataclass(frozen=True)
class Order:
    id: int
    order_number: str
    customer_name: str
    order_date: str
    items: str  # serialized payload; decode with decode_order_items()
    total_amount: float = 0.0

    @classmethod
    def from_row(cls, r) -> "Order":
        return cls(
            id=int(r["id"]),
            order_number=str(r["order_number"]),
            customer_name=str(r["customer_name"]),
            order_date=str(r["order_date"]),
            items=str(r["items"]),
            total_amount=float(r["total_amount"] or 0),
        )


def list_orders(conn) -> list[Order]:
    # Bulk fetch; callers filter by date themselves.
    return [Order.from_row(r) for r in q(conn, "SELECT * FROM orders ORDER BY order_date DESC, id DESC")]


def _line_total(line: OrderLineEntry) -> float:
    if line.price is None:
        return 0.0
    return float(line.live_weight) * float(line.price)


def create_order(
    conn,
    *,
    order_number: str,
    customer_name: str,
    order_date,
    lines: list[OrderLineEntry],
    total_amount: Optional[float] = None,
) -> int:
    order_number = str(order_number or "").strip()
    if not order_number:
        raise ValueError("Order number is required.")
    if not lines:
        raise ValueError("At least one item is required.")
    if any(ln.live_weight <= 0 for ln in lines):
        raise ValueError("Live weight must be greater than 0 on every line.")

    exists = q(conn, "SELECT 1 FROM orders WHERE order_number=?", (order_number,))
    if exists:
        raise ValueError(f"Order number '{order_number}' already exists.")

    if total_amount is None:
        total_amount = round(sum(_line_total(ln) for ln in lines), 2)

    order_id = x(
        conn,
        """
        INSERT INTO orders (order_number, customer_name, order_date, items, total_amount, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            order_number,
            str(customer_name or "").strip() or "Walk-in",
            parse_iso_date(order_date),
            encode_order_items(lines),
            float(total_amount),
            iso_now(),
        ),
    )
    return int(order_id)

from __future__ import annotations

import random
from datetime import date

from shopdesk.db import ensure_schema, q, x
from shopdesk.services.items import SaleType
from shopdesk.services.order_items import OrderLineEntry
from shopdesk.services.orders import create_order
from shopdesk.services.stock_ledger import StockKind, create_stock_entry
from shopdesk.utils import iso_now

# name, sale type, kg per piece, price per kg, price per piece
DEFAULT_ITEMS = [
    ("Rui", SaleType.PER_WEIGHT, None, 380.0, None),
    ("Katla", SaleType.PER_WEIGHT, None, 420.0, None),
    ("Hilsa", SaleType.PER_PIECE, 0.8, None, 950.0),
    ("Pabda", SaleType.PER_PIECE, 0.12, None, 60.0),
    ("Soft Drink", SaleType.PER_PIECE, None, None, 40.0),
]


def upsert_reference_data(conn) -> None:
    ensure_schema(conn)

    for name, sale_type, wpp, ppk, ppp in DEFAULT_ITEMS:
        x(
            conn,
            """
            INSERT OR IGNORE INTO items (name, sale_type, weight_per_pcs, price_per_kg, price_per_pcs, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (name, sale_type.value, wpp, ppk, ppp, iso_now()),
        )


def wipe_all(conn) -> None:
    # Keep schema, delete data.
    for t in ["opening_stock", "closing_stock", "orders", "items"]:
        conn.execute(f"DELETE FROM {t};")
    conn.commit()


def load_demo_data(conn, *, day: str | None = None, seed: int = 7) -> None:
    """One day of orders plus opening and closing counts; a couple of rows won't reconcile."""
    rnd = random.Random(seed)
    upsert_reference_data(conn)
    day = day or date.today().isoformat()

    items = q(conn, "SELECT * FROM items ORDER BY name")
    sold: dict[str, float] = {str(it["name"]): 0.0 for it in items}

    n_existing = int(q(conn, "SELECT COUNT(1) AS n FROM orders")[0]["n"])
    for i in range(6):
        lines = []
        for it in rnd.sample(list(items), k=2):
            per_piece = it["sale_type"] == SaleType.PER_PIECE.value
            qty = float(rnd.randint(1, 6)) if per_piece else round(rnd.uniform(0.5, 4.0), 3)
            price = it["price_per_pcs"] if per_piece else it["price_per_kg"]
            lines.append(
                OrderLineEntry(
                    itemId=str(it["id"]),
                    name=str(it["name"]),
                    liveWeight=qty,
                    price=float(price or 0),
                    itemSaleType=str(it["sale_type"]),
                    weightPerPCS=float(it["weight_per_pcs"]) if it["weight_per_pcs"] is not None else None,
                )
            )
            sold[str(it["name"])] += qty

        create_order(
            conn,
            order_number=f"ORD-{day.replace('-', '')}-{n_existing + i + 1:03d}",
            customer_name=rnd.choice(["Walk-in", "Hotel Sonargaon", "Mr. Karim"]),
            order_date=day,
            lines=lines,
        )

    for idx, it in enumerate(items):
        per_piece = it["sale_type"] == SaleType.PER_PIECE.value
        unit = "PCS" if per_piece else "KG"
        opening = 40.0 if per_piece else 30.0
        closing = opening - sold[str(it["name"])]
        # Every third item gets a miscount so the report shows mismatches.
        if idx % 3 == 1:
            closing -= 1.0 if per_piece else 0.25

        common = dict(entry_date=day, item_id=int(it["id"]), item_name=str(it["name"]), unit=unit)
        create_stock_entry(conn, StockKind.OPENING, quantity=opening, **common)
        create_stock_entry(conn, StockKind.CLOSING, quantity=round(max(closing, 0.0), 3), **common)

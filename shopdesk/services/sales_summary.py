from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable, Iterator, Mapping

from shopdesk.services.items import StockUnit
from shopdesk.services.order_items import OrderLineEntry, decode_order_items


@dataclass
class SoldQuantity:
    pcs: float = 0.0
    kg: float = 0.0

    def for_unit(self, unit) -> float:
        return self.pcs if StockUnit(unit) == StockUnit.PCS else self.kg


class SoldSummary(Mapping[str, SoldQuantity]):
    """
    Item name -> quantities sold on one date.

    Lookups of names with no sales return a zero record; they never add a key.
    """

    def __init__(self, totals: dict[str, SoldQuantity] | None = None):
        self._totals: dict[str, SoldQuantity] = dict(totals or {})

    def __getitem__(self, name: str) -> SoldQuantity:
        return self._totals[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    def get(self, name, default=None) -> SoldQuantity:
        found = self._totals.get(name)
        if found is not None:
            return found
        return default if default is not None else SoldQuantity()

    def quantity(self, name: str, unit) -> float:
        return self.get(name).for_unit(unit)

    def __repr__(self) -> str:
        return f"SoldSummary({self._totals!r})"


def _add_line(totals: dict[str, SoldQuantity], line: OrderLineEntry) -> None:
    acc = totals.setdefault(line.name, SoldQuantity())
    qty = float(line.live_weight)

    if line.is_per_piece:
        # liveWeight is a piece count here
        acc.pcs += qty
        wpp = float(line.weight_per_pcs or 0)
        if wpp > 0:
            acc.kg += qty * wpp
    else:
        acc.kg += qty


def summarize_sales(orders: Iterable, target_date: str) -> SoldSummary:
    """
    Total sold quantities per item name for orders dated exactly ``target_date``.

    Orders only need ``order_date`` and ``items`` attributes. Orders whose
    payload cannot be decoded contribute nothing.
    """
    totals: dict[str, SoldQuantity] = {}
    for order in orders:
        if order.order_date != target_date:
            continue
        for line in decode_order_items(order.items, order.order_date):
            _add_line(totals, line)
    return SoldSummary(totals)

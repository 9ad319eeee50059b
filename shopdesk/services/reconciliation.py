"""
Daily stock reconciliation.

For one business date, each (item, unit) pair that has an opening or closing
count becomes one report row:

    actual usage   = opening - closing        (manual counts)
    expected usage = sold in that unit         (from orders)
    difference     = actual - expected

A row matches when ``abs(difference) < MATCH_TOLERANCE``. Rows with an opening
count but no closing count yet keep ``is_match = False`` and are counted as
mismatches; ``has_closing`` lets the UI tell them apart from real variances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from shopdesk.services.items import StockUnit
from shopdesk.services.sales_summary import SoldSummary
from shopdesk.services.stock_ledger import StockEntry

# Business rule, strict less-than.
MATCH_TOLERANCE = 0.001


def is_match(difference: float) -> bool:
    return abs(difference) < MATCH_TOLERANCE


@dataclass
class StockReportRow:
    item_id: int
    item_name: str
    unit: StockUnit
    opening: float = 0.0
    closing: float = 0.0
    sold: float = 0.0
    actual_usage: float = 0.0
    expected_usage: float = 0.0
    difference: float = 0.0
    is_match: bool = False
    has_closing: bool = False

    @property
    def status(self) -> str:
        return "Match" if self.is_match else "Mismatch"

    def apply_closing(self, quantity: float) -> None:
        self.closing = float(quantity)
        self.actual_usage = self.opening - self.closing
        self.difference = self.actual_usage - self.expected_usage
        self.is_match = is_match(self.difference)
        self.has_closing = True


def build_stock_report(
    opening: Iterable[StockEntry],
    closing: Iterable[StockEntry],
    sold: SoldSummary,
) -> list[StockReportRow]:
    """
    Merge opening counts, closing counts and sales into report rows sorted by item name.

    Entries are keyed by (item_id, unit); when a key repeats, the entry seen
    last wins. Pure: same inputs, same rows in the same order.
    """
    rows: dict[tuple[int, StockUnit], StockReportRow] = {}

    for e in opening:
        unit = StockUnit(e.unit)
        expected = sold.quantity(e.item_name, unit)
        rows[(e.item_id, unit)] = StockReportRow(
            item_id=e.item_id,
            item_name=e.item_name,
            unit=unit,
            opening=float(e.quantity),
            sold=expected,
            expected_usage=expected,
        )

    for e in closing:
        unit = StockUnit(e.unit)
        key = (e.item_id, unit)
        row = rows.get(key)
        if row is None:
            # No opening count: the closing amount itself shows up as a usage deficit.
            expected = sold.quantity(e.item_name, unit)
            row = StockReportRow(
                item_id=e.item_id,
                item_name=e.item_name,
                unit=unit,
                sold=expected,
                expected_usage=expected,
            )
            rows[key] = row
        row.apply_closing(e.quantity)

    return sorted(rows.values(), key=lambda r: (r.item_name.casefold(), r.item_name))


@dataclass(frozen=True)
class ReportSummary:
    total: int
    matches: int
    mismatches: int
    pending: int
    mismatched_items: list[str] = field(default_factory=list)

    @property
    def all_match(self) -> bool:
        return self.total > 0 and self.mismatches == 0


def summarize_report(rows: list[StockReportRow]) -> ReportSummary:
    mismatched = [r for r in rows if not r.is_match]
    return ReportSummary(
        total=len(rows),
        matches=len(rows) - len(mismatched),
        mismatches=len(mismatched),
        pending=sum(1 for r in rows if not r.has_closing),
        mismatched_items=[r.item_name for r in mismatched],
    )

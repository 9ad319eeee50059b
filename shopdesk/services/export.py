from __future__ import annotations

import csv
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

import pandas as pd

from shopdesk.services.reconciliation import StockReportRow

_THOUSANDTHS = Decimal("0.001")

CSV_HEADERS = [
    "Item",
    "Unit",
    "Opening",
    "Closing",
    "Sold (Orders)",
    "Actual Usage",
    "Expected Usage",
    "Difference",
    "Status",
]


def _fmt(v: float) -> str:
    # Exact ties round away from zero; -0.0 prints as 0.000.
    d = Decimal(float(v) + 0.0).quantize(_THOUSANDTHS, rounding=ROUND_HALF_UP)
    return f"{d:f}"


def _unit_label(unit) -> str:
    return getattr(unit, "value", str(unit))


def report_frame(rows: Iterable[StockReportRow]) -> pd.DataFrame:
    """Numeric report table for on-screen display."""
    return pd.DataFrame(
        [
            {
                "item": r.item_name,
                "unit": _unit_label(r.unit),
                "opening": r.opening,
                "closing": r.closing,
                "sold": r.sold,
                "actual_usage": r.actual_usage,
                "expected_usage": r.expected_usage,
                "difference": r.difference,
                "status": r.status if r.has_closing else f"{r.status} (no closing count)",
            }
            for r in rows
        ],
        columns=[
            "item",
            "unit",
            "opening",
            "closing",
            "sold",
            "actual_usage",
            "expected_usage",
            "difference",
            "status",
        ],
    )


def export_report_csv(rows: Iterable[StockReportRow]) -> Optional[bytes]:
    """
    Render the report as CSV bytes: fixed header, every field quoted, numbers
    with three decimals.

    Returns None when there are no rows ("nothing to export").
    """
    records = [
        [
            r.item_name,
            _unit_label(r.unit),
            _fmt(r.opening),
            _fmt(r.closing),
            _fmt(r.sold),
            _fmt(r.actual_usage),
            _fmt(r.expected_usage),
            _fmt(r.difference),
            r.status,
        ]
        for r in rows
    ]
    if not records:
        return None

    df = pd.DataFrame(records, columns=CSV_HEADERS, dtype=str)
    text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return text.encode("utf-8")


def export_filename(report_date: str) -> str:
    return f"stock_reconciliation_{report_date}.csv"

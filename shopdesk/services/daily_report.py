from __future__ import annotations

import logging
from dataclasses import dataclass

from shopdesk.services.orders import list_orders
from shopdesk.services.reconciliation import ReportSummary, StockReportRow, build_stock_report, summarize_report
from shopdesk.services.sales_summary import SoldSummary, summarize_sales
from shopdesk.services.stock_ledger import StockKind, list_stock_entries
from shopdesk.utils import parse_iso_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyStockReport:
    report_date: str
    rows: list[StockReportRow]
    summary: ReportSummary
    sold: SoldSummary


def generate_daily_report(conn, report_date) -> DailyStockReport:
    """
    Fetch orders and stock counts for ``report_date`` and reconcile them.

    Always a full recomputation. Storage errors propagate to the caller.
    """
    d = parse_iso_date(report_date)

    orders = list_orders(conn)
    opening = list_stock_entries(conn, StockKind.OPENING, d)
    closing = list_stock_entries(conn, StockKind.CLOSING, d)

    sold = summarize_sales(orders, d)
    rows = build_stock_report(opening, closing, sold)
    summary = summarize_report(rows)

    logger.info(
        "Stock report %s: %d rows, %d match, %d mismatch (%d awaiting closing)",
        d,
        summary.total,
        summary.matches,
        summary.mismatches,
        summary.pending,
    )
    return DailyStockReport(report_date=d, rows=rows, summary=summary, sold=sold)

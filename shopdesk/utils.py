from __future__ import annotations

import math
from datetime import date, datetime, timezone


def iso_today() -> str:
    return date.today().isoformat()


def iso_now() -> str:
    # Microseconds kept so entries created in the same second still sort by creation.
    return datetime.now(timezone.utc).isoformat()


def parse_iso_date(value) -> str:
    """Normalize a date or ISO date string to ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    s = str(value or "").strip()
    try:
        return date.fromisoformat(s).isoformat()
    except ValueError:
        raise ValueError(f"Invalid date '{s}'. Use YYYY-MM-DD.")


def to_quantity(value, *, label: str = "Quantity") -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{label} is required.")
    try:
        qty = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number.")
    if not math.isfinite(qty):
        raise ValueError(f"{label} must be a finite number.")
    if qty < 0:
        raise ValueError(f"{label} must be >= 0.")
    return round(qty, 3)

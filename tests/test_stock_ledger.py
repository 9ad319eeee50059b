import pytest

from shopdesk.services.items import StockUnit
from shopdesk.services.stock_ledger import (
    StockKind,
    create_stock_entry,
    delete_stock_entry,
    get_stock_entry,
    list_stock_entries,
    update_stock_entry,
)


def _add(conn, kind=StockKind.OPENING, **kw):
    data = dict(entry_date="2025-01-10", item_id=1, item_name="Rui", quantity="10.5", unit="KG")
    data.update(kw)
    return create_stock_entry(conn, kind, **data)


def test_create_and_list_by_date(conn):
    a = _add(conn)
    _add(conn, entry_date="2025-01-11")
    b = _add(conn, item_id=2, item_name="Hilsa", quantity=12, unit="pcs")

    entries = list_stock_entries(conn, "opening", "2025-01-10")
    assert [e.id for e in entries] == [a, b]
    assert entries[0].quantity == 10.5
    assert entries[1].unit == StockUnit.PCS
    assert list_stock_entries(conn, StockKind.CLOSING, "2025-01-10") == []


def test_opening_and_closing_are_separate_ledgers(conn):
    _add(conn, StockKind.CLOSING, quantity=4)
    assert len(list_stock_entries(conn, StockKind.CLOSING, "2025-01-10")) == 1
    assert list_stock_entries(conn, StockKind.OPENING, "2025-01-10") == []


@pytest.mark.parametrize(
    "override, message",
    [
        ({"quantity": ""}, "required"),
        ({"quantity": "abc"}, "number"),
        ({"quantity": -1}, ">= 0"),
        ({"quantity": float("nan")}, "finite"),
        ({"unit": "LB"}, "unit"),
        ({"item_name": "  "}, "name"),
        ({"entry_date": "10/01/2025"}, "date"),
    ],
)
def test_validation(conn, override, message):
    with pytest.raises(ValueError, match=message):
        _add(conn, **override)


def test_update_quantity_and_unit(conn):
    entry_id = _add(conn)
    updated = update_stock_entry(conn, StockKind.OPENING, entry_id, quantity=3, unit="PCS")
    assert updated.quantity == 3
    assert updated.unit == StockUnit.PCS
    assert updated.date == "2025-01-10"
    assert get_stock_entry(conn, StockKind.OPENING, entry_id) == updated


def test_quantities_stored_to_three_decimals(conn):
    entry_id = _add(conn, quantity=6.0004)
    assert get_stock_entry(conn, StockKind.OPENING, entry_id).quantity == 6.0
    updated = update_stock_entry(conn, StockKind.OPENING, entry_id, quantity="2.12345", unit="KG")
    assert updated.quantity == 2.123
    assert get_stock_entry(conn, StockKind.OPENING, entry_id).quantity == 2.123


def test_update_and_delete_missing_entry(conn):
    with pytest.raises(ValueError, match="not found"):
        update_stock_entry(conn, StockKind.CLOSING, 99, quantity=1, unit="KG")
    with pytest.raises(ValueError, match="not found"):
        delete_stock_entry(conn, StockKind.CLOSING, 99)


def test_delete(conn):
    entry_id = _add(conn)
    delete_stock_entry(conn, StockKind.OPENING, entry_id)
    assert get_stock_entry(conn, StockKind.OPENING, entry_id) is None


def test_unknown_kind(conn):
    with pytest.raises(ValueError, match="kind"):
        list_stock_entries(conn, "midday", "2025-01-10")

import json

from shopdesk.services.items import SaleType
from shopdesk.services.order_items import OrderLineEntry, decode_order_items, encode_order_items


def test_decodes_stored_payload_shape():
    raw = json.dumps(
        {
            "items": [
                {"itemId": "1", "name": "Hilsa", "liveWeight": 5, "price": 950, "itemSaleType": "Per PCS", "weightPerPCS": 0.8},
                {"itemId": "2", "name": "Rui", "liveWeight": "3.5", "itemSaleType": "Per KG"},
            ]
        }
    )
    lines = decode_order_items(raw, "2025-01-10")
    assert [ln.name for ln in lines] == ["Hilsa", "Rui"]
    assert lines[0].is_per_piece
    assert lines[0].weight_per_pcs == 0.8
    assert lines[1].live_weight == 3.5
    assert lines[1].sale_type == SaleType.PER_WEIGHT


def test_bare_list_and_missing_optional_fields():
    lines = decode_order_items('[{"name": "Katla", "liveWeight": 2}]')
    assert len(lines) == 1
    assert lines[0].sale_type is None
    assert lines[0].weight_per_pcs is None


def test_missing_live_weight_counts_as_zero():
    lines = decode_order_items('{"items": [{"name": "Katla", "liveWeight": null}, {"name": "Rui"}]}')
    assert [ln.live_weight for ln in lines] == [0.0, 0.0]


def test_malformed_payloads_degrade_to_no_lines(caplog):
    bad = [
        '{"items": [{"name": "Rui", "liveWeight": 1}',  # truncated
        '"just a string"',
        '{"items": {"name": "Rui"}}',
        '{"orders": []}',
        '[{"name": "Rui", "liveWeight": "heavy"}]',
        '[{"liveWeight": 2}]',
        '[{"name": "Rui", "liveWeight": -1}]',
        "not json at all",
        b"\xff\xfe",
        "[" * 100000 + "]" * 100000,  # nested past the recursion limit
        None,
    ]
    for raw in bad:
        assert decode_order_items(raw, "2025-01-10") == []
    assert "2025-01-10" in caplog.text


def test_accepts_spelled_out_sale_types():
    lines = decode_order_items('[{"name": "A", "liveWeight": 1, "itemSaleType": "PerPiece"},'
                               ' {"name": "B", "liveWeight": 1, "itemSaleType": "PerWeight"}]')
    assert lines[0].sale_type == SaleType.PER_PIECE
    assert lines[1].sale_type == SaleType.PER_WEIGHT


def test_encode_uses_stored_keys():
    raw = encode_order_items([OrderLineEntry(name="Hilsa", live_weight=2, item_sale_type="Per PCS", weight_per_pcs=0.8)])
    payload = json.loads(raw)
    assert payload == {"items": [{"name": "Hilsa", "liveWeight": 2.0, "itemSaleType": "Per PCS", "weightPerPCS": 0.8}]}
    assert decode_order_items(raw)[0].weight_per_pcs == 0.8

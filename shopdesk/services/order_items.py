"""
Decoding of the per-order items payload.

Orders store their lines as a JSON blob shaped ``{"items": [...]}``. Each line
carries ``name`` and ``liveWeight``; what ``liveWeight`` means depends on the
line's ``itemSaleType``: a piece count for "Per PCS" items, a weight for
everything else. ``weightPerPCS`` is copied onto the line at order time so the
weight equivalent of a piece sale can be derived without a catalog join.

A payload that fails to decode yields no lines. One corrupt order must not
abort reconciliation for every other order on the same day.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from shopdesk.services.items import SaleType, parse_sale_type

logger = logging.getLogger(__name__)


class OrderLineEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field(..., min_length=1)
    live_weight: float = Field(default=0.0, ge=0, allow_inf_nan=False, alias="liveWeight")
    item_sale_type: Optional[str] = Field(default=None, alias="itemSaleType")
    weight_per_pcs: Optional[float] = Field(default=None, allow_inf_nan=False, alias="weightPerPCS")
    item_id: Optional[Union[str, int]] = Field(default=None, alias="itemId")
    price: Optional[float] = Field(default=None, allow_inf_nan=False)

    @field_validator("live_weight", mode="before")
    @classmethod
    def _blank_weight_is_zero(cls, v):
        return 0.0 if v is None or v == "" else v

    @field_validator("weight_per_pcs", "price", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        return None if v == "" else v

    @property
    def sale_type(self) -> Optional[SaleType]:
        return parse_sale_type(self.item_sale_type)

    @property
    def is_per_piece(self) -> bool:
        return self.sale_type == SaleType.PER_PIECE


_LINES = TypeAdapter(list[OrderLineEntry])


def decode_order_items(raw, order_date: Optional[str] = None) -> list[OrderLineEntry]:
    """Parse an order's items payload. Never raises; returns [] when unparseable."""
    if raw is None:
        return []
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        payload = json.loads(raw) if isinstance(raw, str) else raw
        if isinstance(payload, dict):
            payload = payload.get("items")
        if not isinstance(payload, list):
            raise ValueError(f"expected a list of lines, got {type(payload).__name__}")
        return _LINES.validate_python(payload)
    except (ValueError, TypeError, RecursionError, ValidationError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        logger.warning("Skipping unparseable order items (order_date=%s): %s", order_date, e)
        return []


def encode_order_items(lines: list[OrderLineEntry]) -> str:
    return json.dumps(
        {"items": [ln.model_dump(by_alias=True, exclude_none=True) for ln in lines]},
        ensure_ascii=False,
    )

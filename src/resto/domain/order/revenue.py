from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from resto.domain.order.entities import Order

# Rupiah totals below this are not plausible for a restaurant order; they are
# the truncated-magnitude values written by the upstream formatter.
PLAUSIBLE_MINIMUM = 1000
MAGNITUDE_FACTOR = 1000
# Item-based reference above which a sub-minimum total is treated as anomalous.
ITEM_REFERENCE_THRESHOLD = 10000

_NON_DIGITS = re.compile(r"[^0-9]")


class AnomalyKind(str, Enum):
    ORDER_TOTAL_SCALED = "ORDER_TOTAL_SCALED"
    ORDER_TOTAL_FROM_ITEMS = "ORDER_TOTAL_FROM_ITEMS"
    ORDER_TOTAL_CROSS_CHECK_SCALED = "ORDER_TOTAL_CROSS_CHECK_SCALED"
    REVENUE_FROM_ITEMS = "REVENUE_FROM_ITEMS"
    REVENUE_SCALED = "REVENUE_SCALED"


@dataclass(frozen=True)
class DataAnomalyWarning:
    """A magnitude correction applied while aggregating revenue. Non-fatal."""

    kind: AnomalyKind
    before: float
    after: float
    order_id: str | None = None


@dataclass(frozen=True)
class CompletedOrderRecord:
    order_id: str | None
    total_price: Any
    items: tuple[tuple[Any, Any], ...] = ()

    @classmethod
    def from_order(cls, order: Order) -> CompletedOrderRecord:
        return cls(
            order_id=str(order.order_id),
            total_price=order.total_price.amount,
            items=tuple((item.price.amount, item.quantity) for item in order.items),
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> CompletedOrderRecord:
        raw_items = payload.get("orderItems", payload.get("items")) or []
        items = tuple(
            (item.get("price"), item.get("quantity"))
            for item in raw_items
            if isinstance(item, Mapping)
        )
        order_id = payload.get("id", payload.get("orderId"))
        return cls(
            order_id=None if order_id is None else str(order_id),
            total_price=payload.get("totalPrice"),
            items=items,
        )


@dataclass(frozen=True)
class RevenueResult:
    amount: int
    item_based_total: int
    order_count: int
    anomalies: tuple[DataAnomalyWarning, ...] = ()

    @property
    def corrected(self) -> bool:
        return bool(self.anomalies)


def coerce_amount(raw: Any) -> float:
    """Best-effort numeric reading of a stored monetary value.

    Strings carrying a "Rp" prefix keep only their digits, so "Rp 25.000"
    reads as 25000. Other strings are parsed as plain numbers first and fall
    back to their digits. Anything unreadable counts as zero.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
        return value if math.isfinite(value) else 0.0
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return 0.0
        if "Rp" in text:
            return _digits(text)
        try:
            value = float(text)
        except ValueError:
            return _digits(text)
        return value if math.isfinite(value) else 0.0
    return 0.0


def item_total(record: CompletedOrderRecord) -> float:
    return sum(coerce_amount(price) * coerce_amount(quantity) for price, quantity in record.items)


def revenue(orders: Iterable[CompletedOrderRecord | Order]) -> RevenueResult:
    records = [
        CompletedOrderRecord.from_order(order) if isinstance(order, Order) else order
        for order in orders
    ]
    item_totals = [item_total(record) for record in records]
    item_based_total = sum(item_totals)
    anomalies: list[DataAnomalyWarning] = []

    total_revenue = 0.0
    for record, order_item_total in zip(records, item_totals):
        order_total = coerce_amount(record.total_price)

        if 0 < order_total < PLAUSIBLE_MINIMUM:
            if order_item_total >= PLAUSIBLE_MINIMUM:
                corrected = order_item_total
                kind = AnomalyKind.ORDER_TOTAL_FROM_ITEMS
            else:
                corrected = order_total * MAGNITUDE_FACTOR
                kind = AnomalyKind.ORDER_TOTAL_SCALED
            anomalies.append(
                DataAnomalyWarning(
                    kind=kind,
                    before=order_total,
                    after=corrected,
                    order_id=record.order_id,
                )
            )
            order_total = corrected

        if item_based_total > ITEM_REFERENCE_THRESHOLD and order_total < PLAUSIBLE_MINIMUM:
            corrected = order_total * MAGNITUDE_FACTOR
            if corrected != order_total:
                anomalies.append(
                    DataAnomalyWarning(
                        kind=AnomalyKind.ORDER_TOTAL_CROSS_CHECK_SCALED,
                        before=order_total,
                        after=corrected,
                        order_id=record.order_id,
                    )
                )
            order_total = corrected

        total_revenue += order_total

    final_revenue = total_revenue
    if total_revenue < PLAUSIBLE_MINIMUM and item_based_total > ITEM_REFERENCE_THRESHOLD:
        anomalies.append(
            DataAnomalyWarning(
                kind=AnomalyKind.REVENUE_FROM_ITEMS,
                before=total_revenue,
                after=item_based_total,
            )
        )
        final_revenue = item_based_total

    if 0 < final_revenue < PLAUSIBLE_MINIMUM and records:
        anomalies.append(
            DataAnomalyWarning(
                kind=AnomalyKind.REVENUE_SCALED,
                before=final_revenue,
                after=final_revenue * MAGNITUDE_FACTOR,
            )
        )
        final_revenue *= MAGNITUDE_FACTOR

    return RevenueResult(
        amount=int(round(final_revenue)),
        item_based_total=int(round(item_based_total)),
        order_count=len(records),
        anomalies=tuple(anomalies),
    )


def normalize_revenue(orders: Iterable[CompletedOrderRecord | Order]) -> int:
    return revenue(orders).amount


def _digits(text: str) -> float:
    digits = _NON_DIGITS.sub("", text)
    return float(int(digits)) if digits else 0.0

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from resto.domain.common.ids import MenuId, OrderId, TableId
from resto.domain.common.money import Money
from resto.domain.order.entities import Order, OrderItem, OrderStatus
from resto.domain.order.revenue import (
    AnomalyKind,
    CompletedOrderRecord,
    coerce_amount,
    normalize_revenue,
    revenue,
)


def _record(order_id: str, total: object, items: tuple = ()) -> CompletedOrderRecord:
    return CompletedOrderRecord(order_id=order_id, total_price=total, items=items)


def test_truncated_totals_repaired_from_item_totals() -> None:
    records = [
        _record("1", 500, ((15000, 1),)),
        _record("2", 750, ((11000, 2),)),
    ]

    result = revenue(records)

    assert result.amount == 37000
    assert result.item_based_total == 37000
    assert [anomaly.kind for anomaly in result.anomalies] == [
        AnomalyKind.ORDER_TOTAL_FROM_ITEMS,
        AnomalyKind.ORDER_TOTAL_FROM_ITEMS,
    ]
    assert result.anomalies[0].before == 500
    assert result.anomalies[0].after == 15000


def test_correct_total_is_left_alone() -> None:
    result = revenue([_record("1", 45000, ((20000, 2), (5000, 1)))])

    assert result.amount == 45000
    assert result.anomalies == ()


def test_order_without_trustworthy_items_is_scaled() -> None:
    result = revenue([_record("1", 25, ())])

    assert result.amount == 25000
    assert [anomaly.kind for anomaly in result.anomalies] == [AnomalyKind.ORDER_TOTAL_SCALED]


def test_items_also_truncated_falls_back_to_scaling() -> None:
    result = revenue([_record("1", 30, ((15, 2),))])
    assert result.amount == 30000


def test_zero_totals_use_item_based_reference() -> None:
    result = revenue([_record("1", 0, ((12000, 1),)), _record("2", None, ((8000, 1),))])

    assert result.amount == 20000
    assert result.anomalies[-1].kind == AnomalyKind.REVENUE_FROM_ITEMS


def test_fractional_total_scaled_twice_by_cross_check() -> None:
    result = revenue([_record("1", 0.5, ()), _record("2", 45000, ((45000, 1),))])

    assert result.amount == 500000 + 45000
    assert [anomaly.kind for anomaly in result.anomalies] == [
        AnomalyKind.ORDER_TOTAL_SCALED,
        AnomalyKind.ORDER_TOTAL_CROSS_CHECK_SCALED,
    ]


def test_no_completed_orders_is_zero() -> None:
    result = revenue([])
    assert result.amount == 0
    assert result.order_count == 0
    assert result.anomalies == ()


def test_string_totals_are_coerced() -> None:
    records = [
        _record("1", "Rp 25.000", ((25000, 1),)),
        _record("2", "30000", ((30000, 1),)),
    ]
    assert normalize_revenue(records) == 55000


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 0.0),
        (True, 0.0),
        (45000, 45000.0),
        ("45000", 45000.0),
        (" 12.5 ", 12.5),
        ("Rp 45.000", 45000.0),
        ("IDR 45,000", 45000.0),
        ("", 0.0),
        ("nan", 0.0),
        ("n/a", 0.0),
        (float("inf"), 0.0),
    ],
)
def test_coerce_amount(raw: object, expected: float) -> None:
    assert coerce_amount(raw) == expected


def test_records_from_raw_mappings() -> None:
    record = CompletedOrderRecord.from_mapping(
        {
            "id": 12,
            "totalPrice": "Rp 40.000",
            "orderItems": [{"menuId": 1, "price": "20000", "quantity": 2}],
        }
    )

    assert record.order_id == "12"
    assert record.items == (("20000", 2),)
    assert revenue([record]).amount == 40000


def test_domain_orders_are_accepted_directly() -> None:
    order = Order(
        order_id=OrderId("1"),
        daily_order_id=1,
        table_id=TableId("1"),
        customer_name="",
        created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
        items=(OrderItem(menu_id=MenuId("1"), name="Soto", quantity=3, price=Money(amount=15000)),),
        total_price=Money(amount=45000),
        status=OrderStatus.COMPLETED,
    )
    assert normalize_revenue([order]) == 45000

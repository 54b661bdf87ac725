from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from resto.domain.common.ids import MenuId, OrderId, TableId
from resto.domain.common.money import Money
from resto.domain.order.entities import Order, OrderItem, OrderStatus
from resto.domain.order.revenue import CompletedOrderRecord
from resto.domain.order.stats import order_stats, popular_items


def _order(order_id: int, status: OrderStatus, *items: tuple[str, str, int, int]) -> Order:
    order_items = tuple(
        OrderItem(menu_id=MenuId(menu_id), name=name, quantity=quantity, price=Money(amount=price))
        for menu_id, name, quantity, price in items
    )
    return Order(
        order_id=OrderId(str(order_id)),
        daily_order_id=order_id,
        table_id=TableId("1"),
        customer_name="",
        created_at=datetime(2026, 10, 19, tzinfo=timezone.utc) + timedelta(minutes=order_id),
        items=order_items,
        total_price=Money(amount=sum(item.line_total.amount for item in order_items)),
        status=status,
    )


def _orders() -> list[Order]:
    return [
        _order(1, OrderStatus.COMPLETED, ("1", "Nasi Goreng", 2, 20000), ("3", "Es Teh", 2, 5000)),
        _order(2, OrderStatus.COMPLETED, ("2", "Ayam Bakar", 1, 25000), ("3", "Es Teh", 1, 5000)),
        _order(3, OrderStatus.PENDING, ("2", "Ayam Bakar", 9, 25000)),
        _order(4, OrderStatus.PROCESSING, ("1", "Nasi Goreng", 1, 20000)),
        _order(5, OrderStatus.CANCELLED, ("4", "Es Jeruk", 3, 7000)),
    ]


def test_order_stats_counts_and_revenue() -> None:
    stats = order_stats(_orders())

    assert stats.pending_count == 1
    assert stats.processing_count == 1
    assert stats.completed_count == 2
    assert stats.cancelled_count == 1
    assert stats.revenue.amount == 50000 + 30000
    assert stats.revenue.order_count == 2


def test_popular_items_only_count_completed_orders() -> None:
    stats = order_stats(_orders())
    assert [(item.menu_id, item.quantity) for item in stats.popular_items] == [
        ("3", 3),
        ("1", 2),
        ("2", 1),
    ]


def test_popular_items_limit_and_ties_keep_first_seen() -> None:
    orders = [
        _order(1, OrderStatus.COMPLETED, ("5", "Soto", 1, 18000), ("6", "Rawon", 1, 22000)),
        _order(2, OrderStatus.COMPLETED, ("7", "Pecel", 1, 15000)),
    ]
    assert [item.menu_id for item in popular_items(orders, limit=2)] == ["5", "6"]


def test_order_stats_revenue_from_stored_records() -> None:
    records = [CompletedOrderRecord(order_id="1", total_price=500, items=((15000, 1),))]

    stats = order_stats(_orders(), revenue_records=records)

    assert stats.revenue.amount == 15000
    assert stats.revenue.order_count == 1
    assert stats.completed_count == 2

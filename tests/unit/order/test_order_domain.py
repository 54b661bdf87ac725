from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from resto.domain.common.ids import MenuId, OrderId, TableId
from resto.domain.common.money import Money
from resto.domain.order.entities import (
    Order,
    OrderItem,
    OrderSnapshot,
    OrderStatus,
    create_order,
)


def _item(price: int = 15000, quantity: int = 2) -> OrderItem:
    return OrderItem(
        menu_id=MenuId("1"),
        name="Nasi Goreng",
        quantity=quantity,
        price=Money(amount=price),
    )


def test_order_item_quantity_must_be_gte_one() -> None:
    with pytest.raises(ValueError):
        _item(quantity=0)


def test_snapshot_total_must_match_items() -> None:
    with pytest.raises(ValueError):
        OrderSnapshot(items=(_item(),), total_price=Money(amount=15000))


def test_snapshot_requires_items() -> None:
    with pytest.raises(ValueError):
        OrderSnapshot(items=(), total_price=Money(amount=0))


def test_order_total_must_match_items() -> None:
    with pytest.raises(ValueError):
        Order(
            order_id=OrderId("1"),
            daily_order_id=1,
            table_id=TableId("3"),
            customer_name="Budi",
            created_at=datetime.now(timezone.utc),
            items=(_item(),),
            total_price=Money(amount=29000),
        )


def test_create_order_starts_pending_and_keeps_snapshot_prices() -> None:
    now = datetime.now(timezone.utc)
    snapshot = OrderSnapshot(
        items=(_item(), _item(price=5000, quantity=1)),
        total_price=Money(amount=35000),
    )

    order = create_order(
        order_id=OrderId("17"),
        daily_order_id=3,
        table_id=TableId("3"),
        customer_name="Budi",
        snapshot=snapshot,
        now=now,
    )

    assert order.status == OrderStatus.PENDING
    assert order.is_processed is False
    assert order.total_price.amount == 35000
    assert [item.price.amount for item in order.items] == [15000, 5000]
    assert order.created_at == now


def test_terminal_statuses() -> None:
    assert OrderStatus.COMPLETED.is_terminal
    assert OrderStatus.CANCELLED.is_terminal
    assert not OrderStatus.PENDING.is_terminal
    assert not OrderStatus.PROCESSING.is_terminal

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from resto.domain.common.ids import ChoiceId, MenuId, OptionId, OrderId, TableId
from resto.domain.common.money import Money

SelectionSnapshot = tuple[tuple[OptionId, tuple[ChoiceId, ...]], ...]


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


@dataclass(frozen=True)
class OrderItem:
    menu_id: MenuId
    name: str
    quantity: int
    price: Money
    selections: SelectionSnapshot = ()
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def line_total(self) -> Money:
        return self.price.times(self.quantity)


@dataclass(frozen=True)
class OrderSnapshot:
    items: tuple[OrderItem, ...]
    total_price: Money

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("order must contain at least one item")
        _check_total(self.items, self.total_price)


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    daily_order_id: int
    table_id: TableId
    customer_name: str
    created_at: datetime
    items: tuple[OrderItem, ...]
    total_price: Money
    status: OrderStatus = OrderStatus.PENDING
    is_processed: bool = False
    updated_at: datetime | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("order must contain at least one item")
        if self.daily_order_id < 1:
            raise ValueError("daily_order_id must be >= 1")
        _check_total(self.items, self.total_price)


def create_order(
    order_id: OrderId,
    daily_order_id: int,
    table_id: TableId,
    customer_name: str,
    snapshot: OrderSnapshot,
    now: datetime,
) -> Order:
    return Order(
        order_id=order_id,
        daily_order_id=daily_order_id,
        table_id=table_id,
        customer_name=customer_name,
        created_at=now,
        items=snapshot.items,
        total_price=snapshot.total_price,
        status=OrderStatus.PENDING,
        is_processed=False,
        updated_at=now,
    )


def _check_total(items: tuple[OrderItem, ...], total: Money) -> None:
    for item in items:
        if item.price.currency != total.currency:
            raise ValueError("item currency must match total currency")
    expected = sum(item.line_total.amount for item in items)
    if total.amount != expected:
        raise ValueError("total_price must equal sum of item price * quantity")

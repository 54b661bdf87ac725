from __future__ import annotations

from collections.abc import Iterable

from resto.domain.order.entities import Order, OrderStatus

ACTIVE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING})
TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


def order_queue(orders: Iterable[Order]) -> list[Order]:
    """Kitchen view: active orders, oldest first, input order kept on ties."""
    active = [order for order in orders if order.status in ACTIVE_STATUSES]
    return sorted(active, key=lambda order: order.created_at)


def order_history(orders: Iterable[Order]) -> list[Order]:
    finished = [order for order in orders if order.status in TERMINAL_STATUSES]
    return sorted(finished, key=lambda order: order.created_at, reverse=True)

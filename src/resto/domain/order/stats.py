from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from resto.domain.common.ids import MenuId
from resto.domain.order.entities import Order, OrderStatus
from resto.domain.order.revenue import CompletedOrderRecord, RevenueResult, revenue


@dataclass(frozen=True)
class PopularItem:
    menu_id: MenuId
    name: str
    quantity: int


@dataclass(frozen=True)
class OrderStats:
    pending_count: int
    processing_count: int
    completed_count: int
    cancelled_count: int
    revenue: RevenueResult
    popular_items: tuple[PopularItem, ...]


def popular_items(orders: Iterable[Order], limit: int = 5) -> list[PopularItem]:
    counts: dict[MenuId, int] = {}
    names: dict[MenuId, str] = {}
    for order in orders:
        for item in order.items:
            counts[item.menu_id] = counts.get(item.menu_id, 0) + item.quantity
            names.setdefault(item.menu_id, item.name)

    ranked = sorted(counts.items(), key=lambda entry: entry[1], reverse=True)
    return [
        PopularItem(menu_id=menu_id, name=names[menu_id], quantity=quantity)
        for menu_id, quantity in ranked[:limit]
    ]


def order_stats(
    orders: Iterable[Order],
    popular_limit: int = 5,
    revenue_records: Iterable[CompletedOrderRecord] | None = None,
) -> OrderStats:
    """Counts by status, revenue and best sellers.

    Revenue is taken from revenue_records when given, otherwise from the
    completed orders themselves.
    """
    orders = list(orders)
    by_status: dict[OrderStatus, list[Order]] = {status: [] for status in OrderStatus}
    for order in orders:
        by_status[order.status].append(order)

    completed = by_status[OrderStatus.COMPLETED]
    return OrderStats(
        pending_count=len(by_status[OrderStatus.PENDING]),
        processing_count=len(by_status[OrderStatus.PROCESSING]),
        completed_count=len(completed),
        cancelled_count=len(by_status[OrderStatus.CANCELLED]),
        revenue=revenue(completed if revenue_records is None else revenue_records),
        popular_items=tuple(popular_items(completed, limit=popular_limit)),
    )

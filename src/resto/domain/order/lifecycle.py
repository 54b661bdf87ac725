from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from resto.domain.order.entities import Order, OrderStatus

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.COMPLETED, OrderStatus.CANCELLED}
    ),
    # PROCESSING -> PENDING covers a kitchen marking an order by mistake.
    OrderStatus.PROCESSING: frozenset({OrderStatus.PENDING, OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_NEXT_STATUS: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.PROCESSING,
    OrderStatus.PROCESSING: OrderStatus.COMPLETED,
}


class IllegalTransitionError(Exception):
    def __init__(self, current: OrderStatus, target: OrderStatus, message: str | None = None) -> None:
        super().__init__(message or _describe(current, target))
        self.current = current
        self.target = target

    @property
    def details(self) -> dict[str, str]:
        return {"from": self.current.value, "to": self.target.value}


class OrderAlreadyInPreparationError(IllegalTransitionError):
    def __init__(self, current: OrderStatus, target: OrderStatus) -> None:
        super().__init__(
            current,
            target,
            "order is already being prepared and can no longer be cancelled",
        )


def is_transition_allowed(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition_allowed(current: OrderStatus, target: OrderStatus) -> None:
    if is_transition_allowed(current, target):
        return
    if current == OrderStatus.PROCESSING and target == OrderStatus.CANCELLED:
        raise OrderAlreadyInPreparationError(current, target)
    raise IllegalTransitionError(current, target)


def set_status(order: Order, target: OrderStatus, now: datetime | None = None) -> Order:
    ensure_transition_allowed(order.status, target)
    return replace(order, status=target, updated_at=now or order.updated_at)


def mark_processed(order: Order, is_processed: bool, now: datetime | None = None) -> Order:
    if order.status.is_terminal:
        raise IllegalTransitionError(
            order.status,
            order.status,
            f"cannot change kitchen flag of a {order.status.value.lower()} order",
        )
    if is_processed and order.status == OrderStatus.PENDING:
        ensure_transition_allowed(order.status, OrderStatus.PROCESSING)
        return replace(
            order,
            status=OrderStatus.PROCESSING,
            is_processed=True,
            updated_at=now or order.updated_at,
        )
    return replace(order, is_processed=is_processed, updated_at=now or order.updated_at)


def cancel(order: Order, now: datetime | None = None) -> Order:
    return set_status(order, OrderStatus.CANCELLED, now=now)


def can_customer_cancel(status: OrderStatus) -> bool:
    return status == OrderStatus.PENDING


def next_status(status: OrderStatus) -> OrderStatus:
    return _NEXT_STATUS.get(status, status)


def _describe(current: OrderStatus, target: OrderStatus) -> str:
    if current == target:
        return f"order is already {current.value.lower()}"
    if current == OrderStatus.COMPLETED:
        return "cannot re-open a completed order"
    if current == OrderStatus.CANCELLED:
        return "cannot change a cancelled order"
    return f"cannot move order from {current.value} to {target.value}"

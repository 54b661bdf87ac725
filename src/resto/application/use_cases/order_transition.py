from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from opentelemetry import trace

from resto.application.metrics.order_lifecycle import (
    record_rejected_transition,
    record_time_to_finish,
    record_transition,
)
from resto.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from resto.domain.common.ids import OrderId
from resto.domain.order.entities import Order, OrderStatus
from resto.domain.order.lifecycle import IllegalTransitionError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

Decision = Callable[[Order, datetime], Order]


class OrderNotFoundError(Exception):
    pass


class OrderConflictError(Exception):
    pass


class InvalidOrderStatusError(Exception):
    pass


def parse_status(value: OrderStatus | str) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value.strip().upper())
    except ValueError as exc:
        raise InvalidOrderStatusError(f"invalid order status: {value}") from exc


def _decide(order: Order, decision: Decision, now: datetime) -> Order:
    try:
        return decision(order, now)
    except IllegalTransitionError as exc:
        record_rejected_transition(exc.current, exc.target)
        logger.info(
            "order_transition_rejected",
            extra={
                "order_id": str(order.order_id),
                "from_status": exc.current.value,
                "to_status": exc.target.value,
            },
        )
        raise


def apply_transition(
    repository: OrderRepository,
    order_id: OrderId,
    decision: Decision,
    span_name: str,
) -> Order:
    """Load an order, let the lifecycle decide its next state, then persist it.

    The write is a compare-and-swap on the status that was read. When another
    writer got there first the order is re-read once: a decision that is now
    illegal raises, one that is already in effect returns the stored order, and
    anything else is reported as a conflict. The write itself is never retried.
    """
    with tracer.start_as_current_span(span_name) as span:
        span.set_attribute("resto.order_id", str(order_id))
        order = repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        now = datetime.now(timezone.utc)
        updated = _decide(order, decision, now)
        if updated == order:
            return order

        try:
            persisted = repository.update_lifecycle(
                order_id=order.order_id,
                expected_status=order.status,
                status=updated.status,
                is_processed=updated.is_processed,
            )
        except OptimisticConcurrencyError:
            current = repository.get(order_id)
            if current is None:
                raise OrderNotFoundError(f"order {order_id} not found")
            if _decide(current, decision, now) == current:
                return current
            raise OrderConflictError(f"order {order_id} status update conflict")

        if persisted.status != order.status:
            record_transition(from_status=order.status, to_status=persisted.status)
            if persisted.status.is_terminal:
                record_time_to_finish(persisted, now=now)
        logger.info(
            "order_lifecycle_updated",
            extra={
                "order_id": str(persisted.order_id),
                "from_status": order.status.value,
                "to_status": persisted.status.value,
                "is_processed": persisted.is_processed,
            },
        )
        return persisted

from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Gauge, Histogram

from resto.domain.order.entities import Order, OrderStatus
from resto.domain.order.revenue import DataAnomalyWarning

ORDERS_CREATED_TOTAL = Counter(
    "resto_orders_created_total",
    "Total number of orders created from carts.",
    ["table_id"],
)

ORDER_VALUE = Histogram(
    "resto_order_value",
    "Order total at creation, in whole currency units.",
    buckets=(10_000, 25_000, 50_000, 100_000, 250_000, 500_000, 1_000_000),
)

ORDER_TRANSITION_TOTAL = Counter(
    "resto_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDER_TRANSITION_REJECTED_TOTAL = Counter(
    "resto_order_transition_rejected_total",
    "Total number of status changes rejected by the transition table.",
    ["from", "to"],
)

ORDER_TIME_TO_FINISH_SECONDS = Histogram(
    "resto_order_time_to_finish_seconds",
    "Time between order creation and reaching a terminal status.",
    ["status"],
)

KITCHEN_QUEUE_SIZE = Gauge(
    "resto_kitchen_queue_size",
    "Current number of active orders in the kitchen queue.",
)

REVENUE_CORRECTIONS_TOTAL = Counter(
    "resto_revenue_corrections_total",
    "Total number of monetary magnitude corrections applied during revenue aggregation.",
    ["kind"],
)


def record_order_created(order: Order) -> None:
    ORDERS_CREATED_TOTAL.labels(table_id=str(order.table_id)).inc()
    ORDER_VALUE.observe(order.total_price.amount)


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_rejected_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_REJECTED_TOTAL.labels(
        **{"from": from_status.value, "to": to_status.value}
    ).inc()


def record_time_to_finish(order: Order, now: datetime | None = None) -> None:
    current = now or datetime.now(timezone.utc)
    ORDER_TIME_TO_FINISH_SECONDS.labels(status=order.status.value).observe(
        max((current - order.created_at).total_seconds(), 0.0)
    )


def record_kitchen_queue_size(size: int) -> None:
    KITCHEN_QUEUE_SIZE.set(size)


def record_revenue_correction(anomaly: DataAnomalyWarning) -> None:
    REVENUE_CORRECTIONS_TOTAL.labels(kind=anomaly.kind.value).inc()

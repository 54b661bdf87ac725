from __future__ import annotations

import logging
from collections.abc import Iterable

from opentelemetry import trace

from resto.application.dto.responses import RevenueResponse
from resto.application.mappers.order_mapper import to_revenue_response
from resto.application.metrics.order_lifecycle import record_revenue_correction
from resto.application.ports.repositories import OrderRepository
from resto.config import get_settings
from resto.domain.order.entities import Order
from resto.domain.order.revenue import CompletedOrderRecord, RevenueResult, revenue

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def report_anomalies(result: RevenueResult) -> None:
    for anomaly in result.anomalies:
        record_revenue_correction(anomaly)
        logger.warning(
            "revenue_magnitude_corrected",
            extra={
                "order_id": anomaly.order_id,
                "kind": anomaly.kind.value,
                "before": anomaly.before,
                "after": anomaly.after,
            },
        )
    if result.anomalies:
        logger.warning(
            "revenue_normalized",
            extra={
                "total_revenue": result.amount,
                "item_based_total": result.item_based_total,
            },
        )


def summarize_revenue(
    records: Iterable[CompletedOrderRecord | Order],
    currency: str | None = None,
) -> RevenueResponse:
    result = revenue(records)
    report_anomalies(result)
    return to_revenue_response(result, currency or get_settings().currency)


class RevenueReport:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self) -> RevenueResponse:
        with tracer.start_as_current_span("revenue_report"):
            return summarize_revenue(self._order_repository.list_completed_records())

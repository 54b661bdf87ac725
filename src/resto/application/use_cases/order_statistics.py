from __future__ import annotations

from resto.application.dto.responses import OrderStatsResponse
from resto.application.mappers.order_mapper import to_order_stats_response
from resto.application.ports.repositories import OrderRepository
from resto.application.use_cases.revenue_report import report_anomalies
from resto.config import get_settings
from resto.domain.order.stats import order_stats


class OrderStatistics:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, top_n: int | None = None) -> OrderStatsResponse:
        settings = get_settings()
        stats = order_stats(
            self._order_repository.list_orders(),
            revenue_records=self._order_repository.list_completed_records(),
            popular_limit=top_n if top_n is not None else settings.popular_items_limit,
        )
        report_anomalies(stats.revenue)
        return to_order_stats_response(stats, settings.currency)

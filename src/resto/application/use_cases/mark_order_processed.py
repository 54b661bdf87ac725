from __future__ import annotations

from resto.application.dto.responses import OrderResponse
from resto.application.mappers.order_mapper import to_order_response
from resto.application.ports.repositories import OrderRepository
from resto.application.use_cases.order_transition import apply_transition
from resto.domain.common.ids import OrderId
from resto.domain.order.lifecycle import mark_processed


class MarkOrderProcessed:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId, is_processed: bool) -> OrderResponse:
        order = apply_transition(
            self._order_repository,
            order_id,
            lambda current, now: mark_processed(current, is_processed, now=now),
            span_name="mark_order_processed",
        )
        return to_order_response(order)

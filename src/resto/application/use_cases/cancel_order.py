from __future__ import annotations

from resto.application.dto.responses import OrderResponse
from resto.application.mappers.order_mapper import to_order_response
from resto.application.ports.repositories import OrderRepository
from resto.application.use_cases.order_transition import apply_transition
from resto.domain.common.ids import OrderId
from resto.domain.order.lifecycle import cancel


class CancelOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderResponse:
        order = apply_transition(
            self._order_repository,
            order_id,
            lambda current, now: cancel(current, now=now),
            span_name="cancel_order",
        )
        return to_order_response(order)

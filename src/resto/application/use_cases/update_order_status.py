from __future__ import annotations

from resto.application.dto.responses import OrderResponse
from resto.application.mappers.order_mapper import to_order_response
from resto.application.ports.repositories import OrderRepository
from resto.application.use_cases.order_transition import apply_transition, parse_status
from resto.domain.common.ids import OrderId
from resto.domain.order.entities import OrderStatus
from resto.domain.order.lifecycle import set_status


class UpdateOrderStatus:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId, status: OrderStatus | str) -> OrderResponse:
        target = parse_status(status)
        order = apply_transition(
            self._order_repository,
            order_id,
            lambda current, now: set_status(current, target, now=now),
            span_name="update_order_status",
        )
        return to_order_response(order)

from __future__ import annotations

import logging

from resto.application.dto.responses import KitchenQueueResponse, OrderHistoryResponse
from resto.application.mappers.order_mapper import to_order_response
from resto.application.metrics.order_lifecycle import record_kitchen_queue_size
from resto.application.ports.repositories import OrderRepository
from resto.domain.order.queue import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    order_history,
    order_queue,
)

logger = logging.getLogger(__name__)


class KitchenQueue:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self) -> KitchenQueueResponse:
        orders = order_queue(self._order_repository.list_orders(statuses=ACTIVE_STATUSES))
        record_kitchen_queue_size(len(orders))
        logger.debug("kitchen_queue_built", extra={"queue_size": len(orders)})
        return KitchenQueueResponse(orders=[to_order_response(order) for order in orders])


class OrderHistory:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self) -> OrderHistoryResponse:
        orders = order_history(self._order_repository.list_orders(statuses=TERMINAL_STATUSES))
        return OrderHistoryResponse(orders=[to_order_response(order) for order in orders])

from __future__ import annotations

import logging

from opentelemetry import trace

from resto.application.dto.requests import PlaceOrderRequest
from resto.application.dto.responses import OrderResponse
from resto.application.mappers.order_mapper import to_order_response
from resto.application.metrics.order_lifecycle import record_order_created
from resto.application.ports.repositories import MenuRepository, OrderRepository
from resto.domain.cart.entities import Cart, add_line, snapshot
from resto.domain.common.ids import MenuId, TableId

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class MenuItemUnavailableError(Exception):
    pass


class PlaceOrder:
    def __init__(
        self,
        menu_repository: MenuRepository,
        order_repository: OrderRepository,
    ) -> None:
        self._menu_repository = menu_repository
        self._order_repository = order_repository

    def build_cart(self, table_id: TableId, request_dto: PlaceOrderRequest) -> Cart:
        cart = Cart(table_id=table_id)
        for line in request_dto.lines:
            menu = self._menu_repository.get(MenuId(line.menu_id))
            if menu is None:
                raise MenuItemUnavailableError(f"menu item {line.menu_id} does not exist")
            if not menu.is_available:
                raise MenuItemUnavailableError(f"menu item {line.menu_id} is out of stock")
            cart = add_line(
                cart,
                menu,
                quantity=line.quantity,
                selections=line.selections,
                notes=line.notes,
            )
        return cart

    def execute(self, table_id: TableId, request_dto: PlaceOrderRequest) -> OrderResponse:
        with tracer.start_as_current_span("place_order") as span:
            span.set_attribute("resto.table_id", str(table_id))
            cart = self.build_cart(table_id, request_dto)
            return self.submit(cart, customer_name=request_dto.customer_name)

    def submit(self, cart: Cart, customer_name: str) -> OrderResponse:
        if cart.table_id is None:
            raise ValueError("cart must be bound to a table before submission")

        order_snapshot = snapshot(cart)
        order = self._order_repository.create(
            table_id=cart.table_id,
            customer_name=customer_name,
            snapshot=order_snapshot,
        )
        record_order_created(order)
        logger.info(
            "order_created",
            extra={"order_id": str(order.order_id), "table_id": str(order.table_id)},
        )
        return to_order_response(order)

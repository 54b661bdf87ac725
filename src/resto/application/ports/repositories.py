from __future__ import annotations

from collections.abc import Collection
from typing import Protocol

from resto.domain.common.ids import MenuId, OrderId, TableId
from resto.domain.menu.entities import Menu
from resto.domain.order.entities import Order, OrderSnapshot, OrderStatus
from resto.domain.order.revenue import CompletedOrderRecord


class MenuRepository(Protocol):
    def get(self, menu_id: MenuId) -> Menu | None: ...


class OrderRepository(Protocol):
    def create(self, table_id: TableId, customer_name: str, snapshot: OrderSnapshot) -> Order:
        """Persist a new PENDING order, assigning id, daily id and timestamps."""
        ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def update_lifecycle(
        self,
        order_id: OrderId,
        expected_status: OrderStatus,
        status: OrderStatus,
        is_processed: bool,
    ) -> Order:
        """Write status and flag only if the stored status still equals expected_status.

        Raises OptimisticConcurrencyError otherwise.
        """
        ...

    def list_orders(self, statuses: Collection[OrderStatus] | None = None) -> list[Order]: ...

    def list_completed_records(self) -> list[CompletedOrderRecord]:
        """Completed orders exactly as stored, for revenue reporting.

        Stored totals are not re-validated against their items, so rows whose
        total lost its magnitude still reach the revenue normalizer.
        """
        ...


class OptimisticConcurrencyError(Exception):
    pass

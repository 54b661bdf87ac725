from __future__ import annotations

from resto.application.dto.responses import (
    MoneyResponse,
    OrderItemResponse,
    OrderResponse,
    OrderStatsResponse,
    PopularItemResponse,
    RevenueCorrectionResponse,
    RevenueResponse,
)
from resto.domain.common.money import Money
from resto.domain.order.entities import Order
from resto.domain.order.lifecycle import can_customer_cancel
from resto.domain.order.revenue import RevenueResult
from resto.domain.order.stats import OrderStats


def _money(value: Money) -> MoneyResponse:
    return MoneyResponse(amount=value.amount, currency=value.currency)


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        dailyOrderId=order.daily_order_id,
        tableId=str(order.table_id),
        customerName=order.customer_name,
        status=order.status.value,
        isProcessed=order.is_processed,
        canCancel=can_customer_cancel(order.status),
        items=[
            OrderItemResponse(
                menuId=str(item.menu_id),
                name=item.name,
                quantity=item.quantity,
                price=_money(item.price),
                lineTotal=_money(item.line_total),
                selections={
                    str(option_id): [str(choice_id) for choice_id in choice_ids]
                    for option_id, choice_ids in item.selections
                },
                notes=item.notes,
            )
            for item in order.items
        ],
        totalPrice=_money(order.total_price),
        createdAt=order.created_at,
        updatedAt=order.updated_at,
    )


def to_revenue_response(result: RevenueResult, currency: str) -> RevenueResponse:
    return RevenueResponse(
        totalRevenue=result.amount,
        itemBasedTotal=result.item_based_total,
        completedOrders=result.order_count,
        currency=currency,
        corrections=[
            RevenueCorrectionResponse(
                kind=anomaly.kind.value,
                orderId=anomaly.order_id,
                before=anomaly.before,
                after=anomaly.after,
            )
            for anomaly in result.anomalies
        ],
    )


def to_order_stats_response(stats: OrderStats, currency: str) -> OrderStatsResponse:
    return OrderStatsResponse(
        pendingCount=stats.pending_count,
        processingCount=stats.processing_count,
        completedCount=stats.completed_count,
        cancelledCount=stats.cancelled_count,
        revenue=to_revenue_response(stats.revenue, currency),
        popularItems=[
            PopularItemResponse(menuId=str(item.menu_id), name=item.name, quantity=item.quantity)
            for item in stats.popular_items
        ],
    )

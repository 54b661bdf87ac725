from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amount: int
    currency: str


class OrderItemResponse(BaseModel):
    menuId: str
    name: str
    quantity: int
    price: MoneyResponse
    lineTotal: MoneyResponse
    selections: dict[str, list[str]] = Field(default_factory=dict)
    notes: str | None = None


class OrderResponse(BaseModel):
    orderId: str
    dailyOrderId: int
    tableId: str
    customerName: str
    status: str
    isProcessed: bool
    canCancel: bool
    items: list[OrderItemResponse] = Field(default_factory=list)
    totalPrice: MoneyResponse
    createdAt: datetime
    updatedAt: datetime | None = None


class KitchenQueueResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)


class OrderHistoryResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)


class RevenueCorrectionResponse(BaseModel):
    kind: str
    orderId: str | None = None
    before: float
    after: float


class RevenueResponse(BaseModel):
    totalRevenue: int
    itemBasedTotal: int
    completedOrders: int
    currency: str
    corrections: list[RevenueCorrectionResponse] = Field(default_factory=list)


class PopularItemResponse(BaseModel):
    menuId: str
    name: str
    quantity: int


class OrderStatsResponse(BaseModel):
    pendingCount: int
    processingCount: int
    completedCount: int
    cancelledCount: int
    revenue: RevenueResponse
    popularItems: list[PopularItemResponse] = Field(default_factory=list)

"""Order API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.enums import OrderStatus, PaymentStatus
from storefront.schemas.common import ListParams, id_list, money, non_empty

OrderIds = id_list("order")
Amount = Annotated[str, money("Invalid amount format")]
LinePrice = Annotated[str, money("Invalid price format")]


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    unit_price: LinePrice
    total_price: LinePrice


class OrderCreateRequest(BaseModel):
    """Request body for creating an order with its items.

    order_number is generated when omitted.
    """

    user_id: str
    order_number: str | None = Field(default=None, min_length=1, max_length=32)
    total_amount: Amount
    currency: str = Field(default="USD", min_length=3, max_length=3)
    payment_method: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None
    items: Annotated[list[OrderItemRequest], non_empty("At least one item is required")]


class OrderUpdateRequest(BaseModel):
    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
    payment_method: str | None = None
    payment_id: str | None = None
    notes: str | None = None


class OrdersDeleteRequest(BaseModel):
    ids: OrderIds


class OrdersUpdateRequest(BaseModel):
    ids: OrderIds
    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None


class OrderListParams(ListParams):
    order_number: str | None = None
    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    product_id: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    user_id: str | None = None
    status: str
    total_amount: Decimal
    currency: str
    payment_method: str | None = None
    payment_status: str
    payment_id: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderDetailResponse(OrderResponse):
    items: list[OrderItemResponse] = Field(default_factory=list)

"""Application DTOs for Order operations."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from core.domain.value_objects import StatusType


class LineItemRequest(BaseModel):
    """One requested product. ``quantity`` accepts JSON numbers or decimal strings.

    ``id`` is accepted in place of ``product_id``.
    """

    product_id: str = Field(
        ...,
        validation_alias=AliasChoices("product_id", "id"),
        description="Product ID",
    )
    quantity: int = Field(..., description="Quantity ordered")

    model_config = {"frozen": True}


class PlaceOrderRequest(BaseModel):
    """Request DTO for placing an order.

    ``products`` is accepted in place of ``line_items``.
    """

    line_items: List[LineItemRequest] = Field(
        default_factory=list,
        validation_alias=AliasChoices("line_items", "products"),
        description="Requested products",
    )

    model_config = {"frozen": True}


class ChangeDeliveryRequest(BaseModel):
    """Request DTO for a courier status report."""

    type: StatusType = Field(..., description="Requested status")

    model_config = {"frozen": True}


class StatusDTO(BaseModel):
    """One entry of the status history."""

    type: StatusType = Field(..., description="Status name")
    date: datetime = Field(..., description="When the status was entered")

    model_config = {"frozen": True}


class OrderProductDTO(BaseModel):
    """Ordered product with its quantity as a decimal string."""

    id: str = Field(..., description="Product ID")
    quantity: str = Field(..., description="Quantity ordered")

    model_config = {"frozen": True}


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: str = Field(..., description="Order ID")
    user_id: str = Field(..., description="Buyer ID")
    merchant_id: str = Field(..., description="Merchant ID")
    courier_id: Optional[str] = Field(None, description="Courier currently holding the order")
    price: str = Field(..., description="Exact total price")
    status: List[StatusDTO] = Field(..., description="Status history, oldest first")
    products: List[OrderProductDTO] = Field(default_factory=list, description="Ordered products")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last mutation time")

    model_config = {"frozen": True}


class DeliveryDTO(BaseModel):
    """Courier view of an order (no line items)."""

    id: str = Field(..., description="Order ID")
    user_id: str = Field(..., description="Buyer ID")
    merchant_id: str = Field(..., description="Merchant ID")
    courier_id: Optional[str] = Field(None, description="Courier currently holding the order")
    status: List[StatusDTO] = Field(..., description="Status history, oldest first")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last mutation time")

    model_config = {"frozen": True}


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")

    model_config = {"frozen": True}


class DeliveryListDTO(BaseModel):
    """DTO for listing deliveries."""

    deliveries: List[DeliveryDTO] = Field(default_factory=list, description="List of deliveries")

    model_config = {"frozen": True}

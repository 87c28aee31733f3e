"""Application DTOs for carts."""

from typing import List

from pydantic import BaseModel, Field


class AddCartRequest(BaseModel):
    """Request DTO for adding a product to the cart."""

    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(..., description="Quantity wanted")

    model_config = {"frozen": True}


class CartDTO(BaseModel):
    """Response DTO for a cart row."""

    id: str
    user_id: str
    product_id: str
    merchant_id: str
    quantity: str

    model_config = {"frozen": True}


class CartListDTO(BaseModel):

    carts: List[CartDTO] = Field(default_factory=list)

    model_config = {"frozen": True}

"""Cart models"""

from typing import Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """Product as shown in the catalog and handed to the cart"""
    id: str
    name: str
    price: float = Field(ge=0)
    image: str = ""
    category: str = "accessories"
    description: str = ""
    rating: float = 0.0


class CartLine(BaseModel):
    """One product entry in the cart"""
    product_id: str
    name: str
    unit_price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str = ""

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class CartNotice(BaseModel):
    """Transient "item added" notification"""
    message: str
    expires_at: float


class AddToCartRequest(BaseModel):
    """Request to add a product to the cart"""
    product: Product


class UpdateCartItemRequest(BaseModel):
    """Request to set a line quantity (<= 0 removes the line)"""
    quantity: int


class CartResponse(BaseModel):
    """Cart API response"""
    items: list[CartLine] = []
    item_count: int = 0
    total: float = 0.0
    notice: Optional[str] = None

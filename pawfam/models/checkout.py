"""Checkout models"""

from datetime import date
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    CARD = "card"
    UPI = "upi"
    CASH_ON_DELIVERY = "cod"


class DeliveryExtras(BaseModel):
    """Optional delivery add-ons"""
    gift_wrap: bool = Field(default=False, alias="giftWrap")
    include_receipt: bool = Field(default=False, alias="includeReceipt")

    class Config:
        populate_by_name = True


class CheckoutForm(BaseModel):
    """
    Snapshot of the checkout form as the customer typed it.

    Values are kept as raw strings so that invalid input can be held and
    reported by the validator instead of being rejected on assignment.
    """
    # Shipping
    full_name: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""

    # Delivery preferences
    delivery_date: str = Field(default_factory=lambda: date.today().isoformat())
    delivery_time: str = "17:30"
    extras: DeliveryExtras = Field(default_factory=DeliveryExtras)
    priority_delivery: bool = False

    # Payment
    payment_method: PaymentMethod = PaymentMethod.CARD
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""
    upi_id: str = ""


class OrderItem(BaseModel):
    """Cart line in wire shape"""
    product_id: str = Field(serialization_alias="productId")
    name: str
    price: float
    quantity: int
    image: str = ""


class ShippingAddress(BaseModel):
    """Shipping address for an order"""
    full_name: str = Field(serialization_alias="fullName")
    email: str
    address: str
    city: str
    state: str
    zip_code: str = Field(serialization_alias="zipCode")


class DeliveryPreferences(BaseModel):
    """Requested delivery slot and extras"""
    date: str
    time: str
    extras: DeliveryExtras
    priority_delivery: bool = Field(default=False, serialization_alias="priorityDelivery")


class CardPaymentInfo(BaseModel):
    method: Literal["card"] = "card"
    card_number: str = Field(serialization_alias="cardNumber")
    expiry_date: str = Field(serialization_alias="expiryDate")
    cvv: str


class UpiPaymentInfo(BaseModel):
    method: Literal["upi"] = "upi"
    upi_id: str = Field(serialization_alias="upiId")


class CashOnDeliveryPaymentInfo(BaseModel):
    method: Literal["cod"] = "cod"


PaymentInfo = Union[CardPaymentInfo, UpiPaymentInfo, CashOnDeliveryPaymentInfo]


class OrderRequest(BaseModel):
    """Order body sent to the products API"""
    items: list[OrderItem]
    shipping_address: ShippingAddress = Field(serialization_alias="shippingAddress")
    delivery_preferences: DeliveryPreferences = Field(serialization_alias="deliveryPreferences")
    payment_info: PaymentInfo = Field(serialization_alias="paymentInfo")
    total_amount: float = Field(serialization_alias="totalAmount")

    def to_payload(self) -> dict:
        """Serialize to the backend's camelCase JSON shape"""
        return self.model_dump(by_alias=True, mode="json")


class AddressUpdateRequest(BaseModel):
    """New shipping address for an existing order"""
    full_name: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class SubmissionResult(BaseModel):
    """Outcome of a checkout, booking or adoption submission"""
    success: bool
    errors: dict[str, str] = {}
    notice: Optional[str] = None
    data: Optional[dict] = None

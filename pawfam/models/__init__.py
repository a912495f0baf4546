# Storefront Models

from .cart import Product, CartLine, CartNotice, AddToCartRequest, UpdateCartItemRequest, CartResponse
from .checkout import (
    PaymentMethod,
    DeliveryExtras,
    CheckoutForm,
    OrderItem,
    ShippingAddress,
    DeliveryPreferences,
    CardPaymentInfo,
    UpiPaymentInfo,
    CashOnDeliveryPaymentInfo,
    OrderRequest,
    AddressUpdateRequest,
    SubmissionResult,
)
from .booking import BookingMode, BookingStatus, DaycareCenter, BookingForm, BookingRequest, SavedPet
from .adoption import PetListing, AdoptionForm, AdoptionApplication

__all__ = [
    "Product",
    "CartLine",
    "CartNotice",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CartResponse",
    "PaymentMethod",
    "DeliveryExtras",
    "CheckoutForm",
    "OrderItem",
    "ShippingAddress",
    "DeliveryPreferences",
    "CardPaymentInfo",
    "UpiPaymentInfo",
    "CashOnDeliveryPaymentInfo",
    "OrderRequest",
    "AddressUpdateRequest",
    "SubmissionResult",
    "BookingMode",
    "BookingStatus",
    "DaycareCenter",
    "BookingForm",
    "BookingRequest",
    "SavedPet",
    "PetListing",
    "AdoptionForm",
    "AdoptionApplication",
]

# Storefront routes

from .session import router as session_router
from .cart import router as cart_router
from .checkout import router as checkout_router
from .bookings import router as bookings_router
from .adoption import router as adoption_router
from .auth import router as auth_router

__all__ = [
    "session_router",
    "cart_router",
    "checkout_router",
    "bookings_router",
    "adoption_router",
    "auth_router",
]

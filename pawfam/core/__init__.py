# Core modules

from .config import settings, get_settings
from .session import (
    InvalidTransitionError,
    PasswordResetState,
    PasswordResetFlow,
    BookingFlow,
    StorefrontSession,
    SessionManager,
)

__all__ = [
    "settings",
    "get_settings",
    "InvalidTransitionError",
    "PasswordResetState",
    "PasswordResetFlow",
    "BookingFlow",
    "StorefrontSession",
    "SessionManager",
]

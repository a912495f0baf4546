# Storefront services

from .api_client import (
    PawFamClient,
    PawFamAPIError,
    TransportError,
    ApplicationError,
    SessionExpiredError,
)
from .credentials import CredentialStore
from .checkout import CheckoutService
from .booking import BookingService
from .adoption import AdoptionService
from .catalog import CatalogService
from .password_reset import PasswordResetService
from .submission import SubmissionInProgressError

__all__ = [
    "PawFamClient",
    "PawFamAPIError",
    "TransportError",
    "ApplicationError",
    "SessionExpiredError",
    "CredentialStore",
    "CheckoutService",
    "BookingService",
    "AdoptionService",
    "CatalogService",
    "PasswordResetService",
    "SubmissionInProgressError",
]

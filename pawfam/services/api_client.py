"""
PawFam API Client

HTTP client for the PawFam REST backend. Attaches the stored bearer token
to every request and turns failures into a small exception hierarchy that
the submission services resolve into user-visible state.
"""

import logging
from typing import Any, Optional

import httpx

from ..models.booking import BookingStatus
from .credentials import CredentialStore

logger = logging.getLogger(__name__)


class PawFamAPIError(Exception):
    """Base exception for PawFam API client errors"""
    pass


class TransportError(PawFamAPIError):
    """No response was received from the backend"""
    pass


class ApplicationError(PawFamAPIError):
    """The backend answered with an error status"""

    def __init__(
        self,
        status_code: int,
        message: Optional[str] = None,
        field_errors: Optional[list[dict]] = None,
        body: Any = None,
    ):
        super().__init__(message or f"Request failed with status {status_code}")
        self.status_code = status_code
        self.message = message
        self.field_errors = field_errors or []
        self.body = body


class SessionExpiredError(ApplicationError):
    """The backend rejected the stored token (401)"""
    pass


class PawFamClient:
    """
    Client for the PawFam backend.

    Usage:
        client = PawFamClient(base_url, credentials=CredentialStore(path))
        orders = await client.get_orders()
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the REST API (including the /api prefix)
            credentials: Store holding the bearer token
            timeout: Transport timeout in seconds
            transport: Custom httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.credentials.token:
            headers["Authorization"] = f"Bearer {self.credentials.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make a single HTTP request and return the decoded JSON body"""
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._headers(),
                json=body,
                params=params,
            )
        except httpx.RequestError as e:
            logger.error(f"Could not reach {method} {url}: {e}")
            raise TransportError("Could not reach the server. Please try again.") from e

        if response.status_code == 401:
            logger.warning("Session rejected by backend, clearing stored credentials")
            self.credentials.clear()
            raise SessionExpiredError(401, "Your session has expired. Please log in again.")

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            data = _json_or_none(response)
            message = None
            field_errors = None
            if isinstance(data, dict):
                message = data.get("message")
                if isinstance(data.get("errors"), list):
                    field_errors = data["errors"]
            raise ApplicationError(response.status_code, message, field_errors, data)

        if not response.content:
            return {}
        data = _json_or_none(response)
        if data is None:
            raise ApplicationError(response.status_code, "Malformed response from server")
        return data

    # ==================== Auth APIs ====================

    async def register(self, user_data: dict) -> dict:
        return await self._request("POST", "/auth/register", body=user_data)

    async def login(self, credentials: dict) -> dict:
        """Log in a customer and store the returned token"""
        data = await self._request("POST", "/auth/login", body=credentials)
        self._remember(data)
        return data

    async def vendor_register(self, user_data: dict) -> dict:
        return await self._request("POST", "/auth/vendor/register", body=user_data)

    async def vendor_login(self, credentials: dict) -> dict:
        """Log in a vendor and store the returned token"""
        data = await self._request("POST", "/auth/vendor/login", body=credentials)
        self._remember(data)
        return data

    def logout(self) -> None:
        self.credentials.clear()

    async def forgot_password(self, email: str) -> dict:
        return await self._request("POST", "/auth/forgot-password", body={"email": email})

    async def send_password_reset_otp(self, email: str) -> dict:
        return await self._request("POST", "/auth/send-reset-otp", body={"email": email})

    async def verify_password_reset_otp(self, email: str, otp: str) -> dict:
        return await self._request(
            "POST",
            "/auth/verify-reset-otp",
            body={"email": email, "otp": otp},
        )

    async def reset_password(self, email: str, otp: str, new_password: str) -> dict:
        return await self._request(
            "POST",
            "/auth/reset-password",
            body={"email": email, "otp": otp, "newPassword": new_password},
        )

    async def get_current_user(self) -> Optional[dict]:
        """Who am I; None without a stored token"""
        if not self.credentials.token:
            return None
        return await self._request("GET", "/auth/me")

    async def refresh_current_user(self) -> Optional[dict]:
        """
        Confirm the stored token with the backend and refresh the cached user.

        A 4xx answer means the backend no longer knows this login: the stored
        credentials are cleared and SessionExpiredError is raised. Server and
        transport failures leave them in place and propagate unchanged.
        """
        if not self.credentials.token:
            return None
        try:
            data = await self.get_current_user()
        except SessionExpiredError:
            raise
        except ApplicationError as e:
            if e.status_code >= 500:
                raise
            logger.warning(f"Stored login rejected by backend ({e.status_code}), clearing credentials")
            self.credentials.clear()
            raise SessionExpiredError(e.status_code, "Your session has expired. Please log in again.") from e

        user = data.get("user") if isinstance(data, dict) else None
        if isinstance(user, dict):
            self.credentials.save(self.credentials.token, user)
        return self.credentials.user

    def _remember(self, data: Any) -> None:
        if isinstance(data, dict) and data.get("token"):
            self.credentials.save(data["token"], data.get("user"))

    # ==================== Daycare APIs ====================

    async def create_booking(self, booking: dict) -> dict:
        return await self._request("POST", "/daycare/bookings", body=booking)

    async def get_bookings(self, search: str = "") -> Any:
        params = {"search": search} if search else None
        return await self._request("GET", "/daycare/bookings", params=params)

    async def update_booking(self, booking_id: str, booking: dict) -> dict:
        return await self._request("PUT", f"/daycare/bookings/{booking_id}", body=booking)

    async def cancel_booking(self, booking_id: str) -> dict:
        return await self._request("PATCH", f"/daycare/bookings/{booking_id}/cancel")

    async def delete_booking(self, booking_id: str) -> dict:
        return await self._request("DELETE", f"/daycare/bookings/{booking_id}")

    async def update_booking_status(self, booking_id: str, status: BookingStatus) -> dict:
        """Raises ValueError for a status the backend does not know"""
        return await self._request(
            "PATCH",
            f"/daycare/bookings/{booking_id}/status",
            body={"status": BookingStatus(status).value},
        )

    # ==================== Product Order APIs ====================

    async def create_order(self, order: dict) -> dict:
        return await self._request("POST", "/products/orders", body=order)

    async def get_orders(self) -> Any:
        return await self._request("GET", "/products/orders")

    async def update_order_address(self, order_id: str, shipping_address: dict) -> dict:
        return await self._request(
            "PUT",
            f"/products/orders/{order_id}/address",
            body={"shippingAddress": shipping_address},
        )

    async def cancel_order(self, order_id: str) -> dict:
        return await self._request("PATCH", f"/products/orders/{order_id}/cancel")

    async def delete_order(self, order_id: str) -> dict:
        return await self._request("DELETE", f"/products/orders/{order_id}")

    async def update_order_status(self, order_id: str, status: str) -> dict:
        return await self._request(
            "PATCH",
            f"/products/orders/{order_id}/status",
            body={"status": status},
        )

    # ==================== Adoption APIs ====================

    async def create_application(self, application: dict) -> dict:
        return await self._request("POST", "/adoption/applications", body=application)

    async def get_applications(self) -> Any:
        return await self._request("GET", "/adoption/applications")

    async def update_application(self, application_id: str, application: dict) -> dict:
        return await self._request(
            "PUT",
            f"/adoption/applications/{application_id}",
            body=application,
        )

    async def revoke_application(self, application_id: str) -> dict:
        return await self._request("PATCH", f"/adoption/applications/{application_id}/revoke")

    async def delete_application(self, application_id: str) -> dict:
        return await self._request("DELETE", f"/adoption/applications/{application_id}")

    async def update_application_status(self, application_id: str, status: str) -> dict:
        return await self._request(
            "PATCH",
            f"/adoption/applications/{application_id}/status",
            body={"status": status},
        )

    # ==================== Vendor Daycare APIs ====================

    async def get_centers(self) -> Any:
        return await self._request("GET", "/vendor/daycare/centers")

    async def get_vendor_bookings(self) -> Any:
        return await self._request("GET", "/vendor/daycare/bookings")

    async def get_my_centers(self) -> Any:
        return await self._request("GET", "/vendor/daycare/my-centers")

    async def create_center(self, center: dict) -> dict:
        return await self._request("POST", "/vendor/daycare/centers", body=center)

    async def update_center(self, center_id: str, center: dict) -> dict:
        return await self._request("PUT", f"/vendor/daycare/centers/{center_id}", body=center)

    async def delete_center(self, center_id: str) -> dict:
        return await self._request("DELETE", f"/vendor/daycare/centers/{center_id}")

    # ==================== Vendor Adoption APIs ====================

    async def get_adoption_pets(self) -> Any:
        return await self._request("GET", "/vendor/adoption/pets")

    async def get_my_adoption_pets(self) -> Any:
        return await self._request("GET", "/vendor/adoption/my-pets")

    async def get_vendor_applications(self) -> Any:
        return await self._request("GET", "/vendor/adoption/applications")

    async def create_adoption_pet(self, pet: dict) -> dict:
        return await self._request("POST", "/vendor/adoption/pets", body=pet)

    async def update_adoption_pet(self, pet_id: str, pet: dict) -> dict:
        return await self._request("PUT", f"/vendor/adoption/pets/{pet_id}", body=pet)

    async def delete_adoption_pet(self, pet_id: str) -> dict:
        return await self._request("DELETE", f"/vendor/adoption/pets/{pet_id}")

    # ==================== Vendor Accessories APIs ====================

    async def get_products(self) -> Any:
        return await self._request("GET", "/vendor/accessories/products")

    async def get_my_products(self) -> Any:
        return await self._request("GET", "/vendor/accessories/my-products")

    async def get_vendor_orders(self) -> Any:
        return await self._request("GET", "/vendor/accessories/orders")

    async def create_product(self, product: dict) -> dict:
        return await self._request("POST", "/vendor/accessories/products", body=product)

    async def update_product(self, product_id: str, product: dict) -> dict:
        return await self._request(
            "PUT",
            f"/vendor/accessories/products/{product_id}",
            body=product,
        )

    async def delete_product(self, product_id: str) -> dict:
        return await self._request("DELETE", f"/vendor/accessories/products/{product_id}")

    # ==================== Profile APIs ====================

    async def get_profile(self) -> Any:
        return await self._request("GET", "/profile")

    async def create_profile(self, profile: dict) -> dict:
        return await self._request("POST", "/profile", body=profile)

    async def update_profile(self, profile: dict) -> dict:
        return await self._request("PUT", "/profile", body=profile)

    async def delete_profile(self) -> dict:
        return await self._request("DELETE", "/profile")

    async def get_vendor_profile(self) -> Any:
        return await self._request("GET", "/vendor-profile")

    async def create_vendor_profile(self, profile: dict) -> dict:
        return await self._request("POST", "/vendor-profile", body=profile)

    async def update_vendor_profile(self, profile: dict) -> dict:
        return await self._request("PUT", "/vendor-profile", body=profile)

    async def delete_vendor_profile(self) -> dict:
        return await self._request("DELETE", "/vendor-profile")

    # ==================== Pets APIs ====================

    async def get_breeds(self, category: str) -> Any:
        return await self._request("GET", f"/pets/breeds/{category}")

    async def get_pets(self) -> Any:
        return await self._request("GET", "/pets")

    async def get_pet(self, pet_id: str) -> dict:
        return await self._request("GET", f"/pets/{pet_id}")

    async def create_pet(self, pet: dict) -> dict:
        return await self._request("POST", "/pets", body=pet)

    async def update_pet(self, pet_id: str, pet: dict) -> dict:
        return await self._request("PUT", f"/pets/{pet_id}", body=pet)

    async def delete_pet(self, pet_id: str) -> dict:
        return await self._request("DELETE", f"/pets/{pet_id}")


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None

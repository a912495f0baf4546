import httpx
import pytest

from pawfam.models.booking import BookingStatus
from pawfam.services.api_client import ApplicationError, SessionExpiredError, TransportError


async def test_bearer_token_attached(backend, client, credentials):
    credentials.save("tok-123", {"username": "asha"})
    backend.on("GET", "/products/orders", json=[])

    await client.get_orders()

    request = backend.calls("GET", "/products/orders")[0]
    assert request.headers["Authorization"] == "Bearer tok-123"


async def test_no_authorization_header_without_token(backend, client):
    backend.on("GET", "/vendor/accessories/products", json=[])

    await client.get_products()

    assert "Authorization" not in backend.requests[0].headers


async def test_login_stores_token_and_user(backend, client, credentials):
    backend.on("POST", "/auth/login", json={"token": "tok-9", "user": {"username": "asha", "role": "customer"}})

    await client.login({"email": "asha@example.com", "password": "pw"})

    assert credentials.token == "tok-9"
    assert credentials.role == "customer"


async def test_401_clears_credentials(backend, client, credentials):
    credentials.save("stale", {"username": "asha"})
    backend.on("GET", "/profile", status=401, json={"message": "jwt expired"})

    with pytest.raises(SessionExpiredError):
        await client.get_profile()

    assert credentials.token is None
    assert credentials.user is None


async def test_error_status_carries_message_and_field_errors(backend, client):
    backend.on("POST", "/products/orders", status=400, json={
        "message": "Validation failed",
        "errors": [{"msg": "Invalid zip", "param": "shippingAddress.zipCode"}],
    })

    with pytest.raises(ApplicationError) as exc_info:
        await client.create_order({})

    error = exc_info.value
    assert error.status_code == 400
    assert error.message == "Validation failed"
    assert error.field_errors == [{"msg": "Invalid zip", "param": "shippingAddress.zipCode"}]


async def test_connection_failure_becomes_transport_error(backend, client):
    backend.on("GET", "/vendor/daycare/centers", error=httpx.ConnectError("refused"))

    with pytest.raises(TransportError):
        await client.get_centers()


async def test_empty_body_returns_empty_dict(backend, client):
    backend.on("PATCH", "/products/orders/o1/cancel", status=204)

    assert await client.cancel_order("o1") == {}


async def test_search_param_sent_only_when_given(backend, client):
    backend.on("GET", "/daycare/bookings", json=[])

    await client.get_bookings()
    await client.get_bookings("bruno")

    first, second = backend.calls("GET", "/daycare/bookings")
    assert "search" not in first.url.params
    assert second.url.params["search"] == "bruno"


async def test_order_address_update_wraps_shipping_address(backend, client):
    backend.on("PUT", "/products/orders/o1/address", json={"success": True})

    await client.update_order_address("o1", {"zipCode": "560001"})

    assert backend.last_json("PUT", "/products/orders/o1/address") == {
        "shippingAddress": {"zipCode": "560001"}
    }


async def test_current_user_without_token_skips_request(backend, client):
    assert await client.get_current_user() is None
    assert backend.requests == []


async def test_refresh_current_user_updates_cached_user(backend, client, credentials):
    credentials.save("tok-1", {"username": "asha"})
    backend.on("GET", "/auth/me", json={"user": {"username": "asha", "role": "vendor"}})

    user = await client.refresh_current_user()

    assert user == {"username": "asha", "role": "vendor"}
    assert credentials.role == "vendor"
    assert credentials.token == "tok-1"


async def test_refresh_current_user_clears_login_the_backend_rejects(backend, client, credentials):
    credentials.save("tok-1", {"username": "asha"})
    backend.on("GET", "/auth/me", status=404, json={"message": "User not found"})

    with pytest.raises(SessionExpiredError):
        await client.refresh_current_user()

    assert credentials.token is None
    assert credentials.user is None


async def test_refresh_current_user_keeps_login_on_server_error(backend, client, credentials):
    credentials.save("tok-1", {"username": "asha"})
    backend.on("GET", "/auth/me", status=503, json={"message": "maintenance"})

    with pytest.raises(ApplicationError) as exc_info:
        await client.refresh_current_user()

    assert not isinstance(exc_info.value, SessionExpiredError)
    assert credentials.token == "tok-1"


async def test_refresh_current_user_keeps_login_on_transport_error(backend, client, credentials):
    credentials.save("tok-1", {"username": "asha"})
    backend.on("GET", "/auth/me", error=httpx.ConnectError("refused"))

    with pytest.raises(TransportError):
        await client.refresh_current_user()

    assert credentials.token == "tok-1"


async def test_refresh_current_user_without_token_skips_request(backend, client):
    assert await client.refresh_current_user() is None
    assert backend.requests == []


async def test_booking_status_sent_as_plain_value(backend, client):
    backend.on("PATCH", "/daycare/bookings/b1/status", json={"success": True})

    await client.update_booking_status("b1", BookingStatus.CONFIRMED)
    assert backend.last_json("PATCH", "/daycare/bookings/b1/status") == {"status": "confirmed"}

    await client.update_booking_status("b1", "cancelled")
    assert backend.last_json("PATCH", "/daycare/bookings/b1/status") == {"status": "cancelled"}


async def test_unknown_booking_status_rejected_before_request(backend, client):
    with pytest.raises(ValueError):
        await client.update_booking_status("b1", "archived")

    assert backend.requests == []

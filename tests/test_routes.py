import pytest
from fastapi.testclient import TestClient

from pawfam.core.session import SessionManager
from pawfam.main import app

from conftest import TODAY


@pytest.fixture
def api(client, credentials):
    # Lifespan is not run; wire the state it would create
    app.state.credentials = credentials
    app.state.client = client
    app.state.sessions = SessionManager()
    return TestClient(app)


@pytest.fixture
def headers(api):
    response = api.post("/api/session")
    return {"X-Session-ID": response.json()["session_id"]}


LEASH = {"id": "p1", "name": "Leash", "price": 100}
BOWL = {"id": "p2", "name": "Bowl", "price": 50}


def test_health(api):
    assert api.get("/health").json()["status"] == "healthy"


def test_unknown_session_is_404(api):
    response = api.get("/api/cart", headers={"X-Session-ID": "nope"})
    assert response.status_code == 404


def test_cart_lifecycle(api, headers):
    api.post("/api/cart/items", json={"product": LEASH}, headers=headers)
    response = api.post("/api/cart/items", json={"product": LEASH}, headers=headers)
    api.post("/api/cart/items", json={"product": BOWL}, headers=headers)

    cart = api.get("/api/cart", headers=headers).json()
    assert [item["quantity"] for item in cart["items"]] == [2, 1]
    assert cart["total"] == 250
    assert cart["item_count"] == 3
    assert response.json()["notice"] == "Leash added to cart"

    cart = api.put("/api/cart/items/p1", json={"quantity": 0}, headers=headers).json()
    assert [item["product_id"] for item in cart["items"]] == ["p2"]

    cart = api.delete("/api/cart", headers=headers).json()
    assert cart["items"] == []


def test_products_filtered_and_sorted(api, backend):
    backend.on("GET", "/vendor/accessories/products", json={"products": [
        {"_id": "a", "name": "Rope Toy", "price": 300, "category": "toys"},
        {"_id": "b", "name": "Ball", "price": 120, "category": "toys"},
        {"_id": "c", "name": "Kibble", "price": 900, "category": "food"},
    ]})

    response = api.get("/api/products", params={"category": "toys", "sort_by": "price-low"})

    assert [p["name"] for p in response.json()] == ["Ball", "Rope Toy"]


def test_products_backend_down_is_502(api, backend):
    backend.on("GET", "/vendor/accessories/products", status=500, json={"message": "db down"})

    assert api.get("/api/products").status_code == 502


def test_checkout_requires_login(api, headers):
    response = api.post("/api/checkout/open", headers=headers)
    assert response.status_code == 401


def test_checkout_end_to_end(api, backend, credentials, headers):
    credentials.save("tok", {"username": "asha", "email": "asha@example.com"})
    backend.on("GET", "/auth/me", json={"user": {"username": "asha", "email": "asha@example.com"}})
    backend.on("GET", "/profile", status=404, json={"message": "Profile not found"})
    backend.on("POST", "/products/orders", status=201, json={"_id": "order-1"})

    api.post("/api/cart/items", json={"product": LEASH}, headers=headers)
    api.post("/api/cart/items", json={"product": LEASH}, headers=headers)
    api.post("/api/cart/items", json={"product": BOWL}, headers=headers)

    opened = api.post("/api/checkout/open", headers=headers).json()
    assert opened["form"]["full_name"] == "asha"
    assert opened["total"] == 250

    form = dict(opened["form"])
    form.update(
        full_name="Asha Rao",
        address="12 MG Road",
        city="Bengaluru",
        state="Karnataka",
        zip_code="560001",
        delivery_date=TODAY.replace(year=TODAY.year + 5).isoformat(),
        payment_method="cod",
    )
    updated = api.put("/api/checkout/form", json=form, headers=headers).json()
    assert updated["errors"] == {}

    result = api.post("/api/checkout", headers=headers).json()

    assert result["success"] is True
    assert backend.last_json("POST", "/products/orders")["totalAmount"] == 250
    assert backend.last_json("POST", "/products/orders")["paymentInfo"] == {"method": "cod"}
    assert api.get("/api/cart", headers=headers).json()["items"] == []


def test_booking_draft_prices_stay(api, headers):
    center = {"id": "c1", "name": "Happy Paws", "location": "Indiranagar", "price_per_day": 500}
    api.put("/api/bookings/draft/center", json=center, headers=headers)

    draft = api.put(
        "/api/bookings/draft/form",
        json={"start_date": "2026-11-01", "end_date": "2026-11-03"},
        headers=headers,
    ).json()

    assert draft["days"] == 2
    assert draft["total_amount"] == 1000


def test_password_reset_out_of_order_is_409(api, headers):
    response = api.post("/api/auth/password-reset/verify", json={"otp": "123456"}, headers=headers)
    assert response.status_code == 409


def test_password_reset_status(api, backend, headers):
    backend.on("POST", "/auth/send-reset-otp", json={"success": True})

    api.post("/api/auth/password-reset/otp", json={"email": "asha@example.com"}, headers=headers)
    status = api.get("/api/auth/password-reset", headers=headers).json()

    assert status["state"] == "otp_pending"
    assert status["email"] == "asha@example.com"
    assert status["seconds_remaining"] > 0


def test_login_and_logout(api, backend, credentials):
    backend.on("POST", "/auth/login", json={"token": "tok-1", "user": {"username": "asha", "role": "customer"}})
    backend.on("GET", "/auth/me", json={"user": {"username": "asha", "role": "customer"}})

    result = api.post("/api/auth/login", json={"email": "asha@example.com", "password": "pw"}).json()
    assert result["success"] is True
    assert api.get("/api/auth/me").json()["role"] == "customer"

    api.post("/api/auth/logout")
    assert credentials.token is None


def test_me_without_login(api, backend):
    assert api.get("/api/auth/me").json() == {"user": None, "role": None}
    assert backend.requests == []


def test_me_reflects_backend_user(api, backend, credentials):
    credentials.save("tok-1", {"username": "asha", "role": "customer"})
    backend.on("GET", "/auth/me", json={"user": {"username": "asha", "role": "vendor"}})

    assert api.get("/api/auth/me").json() == {
        "user": {"username": "asha", "role": "vendor"},
        "role": "vendor",
    }


@pytest.mark.parametrize("status", [401, 404])
def test_me_with_rejected_token_is_401_and_clears_login(api, backend, credentials, status):
    credentials.save("revoked", {"username": "asha", "role": "customer"})
    backend.on("GET", "/auth/me", status=status, json={"message": "Invalid token"})

    response = api.get("/api/auth/me")

    assert response.status_code == 401
    assert credentials.token is None
    assert credentials.user is None


def test_me_backend_down_is_502_and_keeps_login(api, backend, credentials):
    credentials.save("tok-1", {"username": "asha"})
    backend.on("GET", "/auth/me", status=500, json={"message": "db down"})

    assert api.get("/api/auth/me").status_code == 502
    assert credentials.token == "tok-1"


def test_checkout_with_rejected_token_requires_login(api, backend, credentials, headers):
    credentials.save("revoked", {"username": "asha", "email": "asha@example.com"})
    backend.on("GET", "/auth/me", status=401, json={"message": "jwt expired"})

    response = api.post("/api/checkout/open", headers=headers)

    assert response.status_code == 401
    assert credentials.token is None


def test_delete_session(api, headers):
    session_id = headers["X-Session-ID"]
    assert api.delete(f"/api/session/{session_id}").status_code == 200
    assert api.get(f"/api/session/{session_id}").status_code == 404

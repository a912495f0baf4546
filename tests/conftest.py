"""Shared fixtures: a controllable clock and a scripted PawFam backend"""

import json
from datetime import date, datetime, timezone

import httpx
import pytest

from pawfam.core.session import PasswordResetFlow, StorefrontSession
from pawfam.models.cart import Product
from pawfam.models.checkout import CheckoutForm, PaymentMethod
from pawfam.services.api_client import PawFamClient
from pawfam.services.credentials import CredentialStore
from pawfam.store.cart import CartStore

BASE_URL = "https://backend.test/api"

TODAY = date(2026, 10, 19)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeBackend:
    """
    httpx handler answering from a table of (method, path) -> response.

    Paths are given without the /api prefix. Unknown routes answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], object] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, json=None, error: Exception = None):
        self.routes[(method, "/api" + path)] = (status, json, error)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        status, body, error = route
        if error is not None:
            raise error
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path == "/api" + path
        ]

    def last_json(self, method: str, path: str) -> dict:
        return json.loads(self.calls(method, path)[-1].content)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def credentials(tmp_path):
    return CredentialStore(str(tmp_path / "credentials.json"))


@pytest.fixture
def client(backend, credentials):
    return PawFamClient(BASE_URL, credentials, transport=httpx.MockTransport(backend))


@pytest.fixture
def session(clock):
    now = datetime.now(timezone.utc)
    return StorefrontSession(
        session_id="test-session",
        created_at=now,
        updated_at=now,
        cart=CartStore(notice_seconds=3.0, clock=clock),
        password_reset=PasswordResetFlow(countdown_seconds=600, clock=clock),
    )


@pytest.fixture
def leash():
    return Product(id="p1", name="Leash", price=100.0, category="accessories")


@pytest.fixture
def bowl():
    return Product(id="p2", name="Bowl", price=50.0, category="food")


@pytest.fixture
def card_form():
    """Checkout form that passes every rule on TODAY"""
    return CheckoutForm(
        full_name="Asha Rao",
        email="asha@example.com",
        address="12 MG Road",
        city="Bengaluru",
        state="Karnataka",
        zip_code="560001",
        delivery_date=TODAY.isoformat(),
        delivery_time="17:30",
        payment_method=PaymentMethod.CARD,
        card_number="4111 1111 1111 1111",
        expiry_date="12/29",
        cvv="123",
    )

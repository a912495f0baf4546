"""Checkout API routes"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..core.session import StorefrontSession
from ..models.checkout import AddressUpdateRequest, CheckoutForm, SubmissionResult
from ..services.api_client import PawFamAPIError, PawFamClient, SessionExpiredError
from ..services.checkout import CheckoutService
from ..services.submission import SubmissionInProgressError
from .deps import api_error_to_http, get_client, get_session

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


def get_checkout_service(client: PawFamClient = Depends(get_client)) -> CheckoutService:
    return CheckoutService(client)


class CheckoutFormResponse(BaseModel):
    """Current checkout form with inline field errors"""
    form: CheckoutForm
    errors: dict[str, str] = {}
    total: float = 0.0


@router.post("/open", response_model=CheckoutFormResponse)
async def open_checkout(
    session: StorefrontSession = Depends(get_session),
    client: PawFamClient = Depends(get_client),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Start a checkout, prefilled from the logged-in user's profile"""
    try:
        user = await client.refresh_current_user()
    except SessionExpiredError:
        user = None
    except PawFamAPIError as e:
        raise api_error_to_http(e)
    if not user:
        raise HTTPException(status_code=401, detail="Please login to continue to checkout")

    form = await checkout.prefill(session, user)
    return CheckoutFormResponse(form=form, errors={}, total=session.cart.total())


@router.put("/form", response_model=CheckoutFormResponse)
async def update_form(
    form: CheckoutForm,
    session: StorefrontSession = Depends(get_session),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Save edits and validate the changed fields"""
    errors = checkout.update_form(session, form)
    return CheckoutFormResponse(form=session.checkout, errors=errors, total=session.cart.total())


@router.post("", response_model=SubmissionResult)
async def place_order(
    session: StorefrontSession = Depends(get_session),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """
    Place the order.

    Validation failures and backend errors come back as a result with
    success=false; the cart and form are left untouched for a retry.
    """
    try:
        return await checkout.submit(session)
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/orders/{order_id}/address", response_model=SubmissionResult)
async def update_order_address(
    order_id: str,
    address: AddressUpdateRequest,
    checkout: CheckoutService = Depends(get_checkout_service),
):
    return await checkout.update_shipping_address(order_id, address)


@router.patch("/orders/{order_id}/cancel", response_model=SubmissionResult)
async def cancel_order(
    order_id: str,
    checkout: CheckoutService = Depends(get_checkout_service),
):
    return await checkout.cancel_order(order_id)

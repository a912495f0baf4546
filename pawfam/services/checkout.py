"""
Checkout Service

Drives the product checkout for a storefront session:
1. Prefills the form from the logged-in user and their profile
2. Validates every field before anything is sent
3. Builds the order from the cart and submits it
4. Clears the cart only when the backend accepted the order
"""

import logging
from datetime import date
from typing import Optional

from ..core.session import StorefrontSession
from ..models.checkout import AddressUpdateRequest, CheckoutForm, PaymentMethod, SubmissionResult
from .api_client import PawFamAPIError, PawFamClient
from .normalizer import normalize_profile
from .payloads import build_order_request, mask_order_payload
from .submission import resolve_api_error, submission_guard
from .validation import CHECKOUT_FIELDS, validate_address_update, validate_all, validate_field

PAYMENT_FIELDS = ("card_number", "expiry_date", "cvv", "upi_id")

logger = logging.getLogger(__name__)


class CheckoutService:
    """Order placement and order address changes"""

    def __init__(self, client: PawFamClient):
        self.client = client

    async def prefill(self, session: StorefrontSession, user: Optional[dict] = None) -> CheckoutForm:
        """
        Open the checkout with known user details filled in.

        Sensitive payment fields always start empty. A failing profile lookup
        is not fatal; the form opens with whatever the user record provides.
        """
        user = user or {}
        current = session.checkout
        form = CheckoutForm(
            full_name=user.get("username") or "",
            email=user.get("email") or "",
            payment_method=PaymentMethod.CARD,
            delivery_date=current.delivery_date or date.today().isoformat(),
            delivery_time=current.delivery_time or "17:30",
            extras=current.extras,
            priority_delivery=current.priority_delivery,
        )

        try:
            profile = normalize_profile(await self.client.get_profile())
        except PawFamAPIError as e:
            logger.debug(f"Could not fetch profile to prefill checkout: {e}")
            profile = {}

        updates = {}
        if profile.get("name"):
            updates["full_name"] = profile["name"]
        # Customer profiles carry residentialAddress, vendor profiles communicationAddress
        address = profile.get("residentialAddress") or profile.get("communicationAddress")
        if address:
            updates["address"] = address
        for source, target in (("city", "city"), ("state", "state"), ("zipCode", "zip_code"), ("email", "email")):
            if profile.get(source):
                updates[target] = str(profile[source])

        session.checkout = form.model_copy(update=updates)
        session.touch()
        return session.checkout

    def update_form(
        self,
        session: StorefrontSession,
        form: CheckoutForm,
        today: Optional[date] = None,
    ) -> dict[str, str]:
        """
        Store an edited form and re-check the fields that changed.

        Errors on untouched fields are left as they were; submit() re-runs
        everything anyway.
        """
        previous = session.checkout
        errors = dict(session.checkout_errors)
        method_changed = form.payment_method != previous.payment_method

        for name in CHECKOUT_FIELDS:
            value = getattr(form, name)
            if value != getattr(previous, name):
                error = validate_field(name, value, form, today=today)
                if error:
                    errors[name] = error
                else:
                    errors.pop(name, None)
            elif method_changed and name in PAYMENT_FIELDS:
                # Fields of a method no longer selected stop counting
                if validate_field(name, value, form, today=today) is None:
                    errors.pop(name, None)

        session.checkout = form
        session.checkout_errors = errors
        session.touch()
        return errors

    async def submit(self, session: StorefrontSession, today: Optional[date] = None) -> SubmissionResult:
        """Validate and place the order for the session's cart"""
        with submission_guard(session):
            form = session.checkout

            errors = validate_all(form, today=today)
            session.checkout_errors = errors
            if errors:
                return SubmissionResult(success=False, errors=errors)

            if len(session.cart) == 0:
                return SubmissionResult(success=False, notice="Your cart is empty")

            order = build_order_request(session.cart.lines(), form, session.cart.total())
            payload = order.to_payload()
            logger.info(f"Order payload (masked): {mask_order_payload(payload)}")

            try:
                response = await self.client.create_order(payload)
            except PawFamAPIError as e:
                logger.error(f"Order submission failed: {e}")
                result = resolve_api_error(e, "Error placing order")
                session.checkout_errors = {**session.checkout_errors, **result.errors}
                return result

            session.cart.clear()
            session.reset_checkout()
            session.touch()
            return SubmissionResult(
                success=True,
                notice="Order placed successfully! Thank you for your purchase.",
                data=response if isinstance(response, dict) else {"result": response},
            )

    async def update_shipping_address(
        self,
        order_id: str,
        address: AddressUpdateRequest,
    ) -> SubmissionResult:
        errors = validate_address_update(address)
        if errors:
            return SubmissionResult(success=False, errors=errors)

        try:
            response = await self.client.update_order_address(
                order_id,
                {
                    "fullName": address.full_name,
                    "email": address.email,
                    "address": address.address,
                    "city": address.city,
                    "state": address.state,
                    "zipCode": address.zip_code,
                },
            )
        except PawFamAPIError as e:
            return resolve_api_error(e, "Failed to update delivery address")

        return SubmissionResult(
            success=True,
            notice="Delivery address updated successfully!",
            data=response if isinstance(response, dict) else None,
        )

    async def cancel_order(self, order_id: str) -> SubmissionResult:
        try:
            await self.client.cancel_order(order_id)
        except PawFamAPIError as e:
            return resolve_api_error(e, "Failed to cancel order")
        return SubmissionResult(success=True, notice="Order cancelled successfully!")

"""Daycare booking service"""

import logging
from collections.abc import Mapping

from ..core.session import StorefrontSession
from ..models.booking import DaycareCenter
from ..models.checkout import SubmissionResult
from .api_client import PawFamAPIError, PawFamClient
from .normalizer import normalize_list
from .payloads import build_booking_request
from .submission import resolve_api_error, submission_guard
from .validation import validate_booking

logger = logging.getLogger(__name__)


def _center_from_raw(raw: Mapping) -> DaycareCenter:
    try:
        rate = float(raw.get("pricePerDay") or 0)
    except (TypeError, ValueError):
        rate = 0.0
    return DaycareCenter(
        id=str(raw.get("_id") or raw.get("id") or ""),
        name=str(raw.get("name") or "Daycare Center"),
        location=str(raw.get("location") or ""),
        price_per_day=max(rate, 0.0),
    )


class BookingService:
    """Browse daycare centers and book a stay"""

    def __init__(self, client: PawFamClient):
        self.client = client

    async def list_centers(self) -> list[DaycareCenter]:
        raw = await self.client.get_centers()
        return [_center_from_raw(item) for item in normalize_list(raw) if isinstance(item, Mapping)]

    async def list_bookings(self, search: str = "") -> list:
        return normalize_list(await self.client.get_bookings(search))

    async def submit(self, session: StorefrontSession) -> SubmissionResult:
        """Validate the booking form, price the stay and create the booking"""
        with submission_guard(session):
            flow = session.booking
            if flow.center is None:
                return SubmissionResult(success=False, notice="Please select a daycare center")

            errors = validate_booking(flow.form)
            if errors:
                return SubmissionResult(success=False, errors=errors)

            booking = build_booking_request(flow.center, flow.form)
            logger.info(
                f"Booking {flow.center.name} from {booking.start_date} to {booking.end_date}: "
                f"{booking.total_amount}"
            )

            try:
                response = await self.client.create_booking(booking.to_payload())
            except PawFamAPIError as e:
                return resolve_api_error(e, "Error creating booking")

            flow.reset(email=flow.form.email, mobile_number=flow.form.mobile_number)
            session.touch()
            return SubmissionResult(
                success=True,
                notice="Daycare booking created successfully!",
                data=response if isinstance(response, dict) else None,
            )

    async def cancel_booking(self, booking_id: str) -> SubmissionResult:
        try:
            await self.client.cancel_booking(booking_id)
        except PawFamAPIError as e:
            return resolve_api_error(e, "Failed to cancel booking")
        return SubmissionResult(success=True, notice="Booking cancelled successfully!")

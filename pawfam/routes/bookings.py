"""Daycare booking API routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..core.session import StorefrontSession
from ..models.booking import BookingForm, BookingMode, DaycareCenter, SavedPet
from ..models.checkout import SubmissionResult
from ..services.api_client import PawFamAPIError, PawFamClient
from ..services.booking import BookingService
from ..services.pricing import booking_days, compute_booking_total
from ..services.submission import SubmissionInProgressError
from .deps import api_error_to_http, get_client, get_session

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def get_booking_service(client: PawFamClient = Depends(get_client)) -> BookingService:
    return BookingService(client)


class ModeRequest(BaseModel):
    mode: BookingMode


class BookingDraft(BaseModel):
    """Booking in progress with its running price"""
    center: Optional[DaycareCenter] = None
    mode: BookingMode
    saved_pet_id: Optional[str] = None
    form: BookingForm
    days: Optional[int] = None
    total_amount: Optional[float] = None


def draft_response(session: StorefrontSession) -> BookingDraft:
    flow = session.booking
    draft = BookingDraft(
        center=flow.center,
        mode=flow.mode,
        saved_pet_id=flow.saved_pet_id,
        form=flow.form,
    )
    if flow.center and flow.form.start_date and flow.form.end_date:
        try:
            start = date.fromisoformat(flow.form.start_date)
            end = date.fromisoformat(flow.form.end_date)
        except ValueError:
            return draft
        draft.days = booking_days(start, end)
        draft.total_amount = compute_booking_total(start, end, flow.center.price_per_day)
    return draft


@router.get("/centers", response_model=list[DaycareCenter])
async def list_centers(bookings: BookingService = Depends(get_booking_service)):
    try:
        return await bookings.list_centers()
    except PawFamAPIError as e:
        raise api_error_to_http(e)


@router.get("")
async def list_bookings(
    search: str = Query(""),
    bookings: BookingService = Depends(get_booking_service),
):
    """The customer's daycare bookings"""
    try:
        return await bookings.list_bookings(search)
    except PawFamAPIError as e:
        raise api_error_to_http(e)


@router.get("/draft", response_model=BookingDraft)
async def get_draft(session: StorefrontSession = Depends(get_session)):
    return draft_response(session)


@router.put("/draft/center", response_model=BookingDraft)
async def select_center(
    center: DaycareCenter,
    session: StorefrontSession = Depends(get_session),
):
    session.booking.select_center(center)
    return draft_response(session)


@router.put("/draft/mode", response_model=BookingDraft)
async def select_mode(
    request: ModeRequest,
    session: StorefrontSession = Depends(get_session),
):
    session.booking.select_mode(request.mode)
    return draft_response(session)


@router.put("/draft/pet", response_model=BookingDraft)
async def select_saved_pet(
    pet: SavedPet,
    session: StorefrontSession = Depends(get_session),
):
    session.booking.select_saved_pet(pet)
    return draft_response(session)


@router.put("/draft/form", response_model=BookingDraft)
async def update_form(
    form: BookingForm,
    session: StorefrontSession = Depends(get_session),
):
    session.booking.update_form(form)
    return draft_response(session)


@router.post("", response_model=SubmissionResult)
async def create_booking(
    session: StorefrontSession = Depends(get_session),
    bookings: BookingService = Depends(get_booking_service),
):
    try:
        return await bookings.submit(session)
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/{booking_id}/cancel", response_model=SubmissionResult)
async def cancel_booking(
    booking_id: str,
    bookings: BookingService = Depends(get_booking_service),
):
    return await bookings.cancel_booking(booking_id)

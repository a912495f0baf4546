"""
Request Builders

Pure transforms from session state (cart lines, form snapshots) to the
request bodies the REST backend expects. Nothing here reads auth state or
touches the network, so a payload can be rebuilt at any time.
"""

import copy
from datetime import date
from typing import Iterable

from ..models.adoption import (
    AdoptionApplication,
    AdoptionForm,
    Experience,
    PersonalInfo,
    PetListing,
    PetSummary,
    VisitSchedule,
)
from ..models.booking import BookingForm, BookingRequest, CenterSummary, DaycareCenter
from ..models.cart import CartLine
from ..models.checkout import (
    CardPaymentInfo,
    CashOnDeliveryPaymentInfo,
    CheckoutForm,
    DeliveryPreferences,
    OrderItem,
    OrderRequest,
    PaymentInfo,
    PaymentMethod,
    ShippingAddress,
    UpiPaymentInfo,
)
from .pricing import compute_booking_total
from .validation import digits_only


def build_payment_info(form: CheckoutForm) -> PaymentInfo:
    """Payment block for the selected method; other methods' fields are dropped"""
    if form.payment_method == PaymentMethod.CARD:
        return CardPaymentInfo(
            card_number=digits_only(form.card_number),
            expiry_date=form.expiry_date,
            cvv=digits_only(form.cvv),
        )
    if form.payment_method == PaymentMethod.UPI:
        return UpiPaymentInfo(upi_id=form.upi_id)
    return CashOnDeliveryPaymentInfo()


def build_order_request(
    cart_lines: Iterable[CartLine],
    form: CheckoutForm,
    computed_total: float,
) -> OrderRequest:
    """
    Assemble an order from the cart and a validated checkout form.

    The total is taken as given from the cart store; it is never re-derived
    from the lines here.
    """
    items = [
        OrderItem(
            product_id=str(line.product_id),
            name=line.name,
            price=line.unit_price,
            quantity=line.quantity,
            image=line.image,
        )
        for line in cart_lines
    ]

    return OrderRequest(
        items=items,
        shipping_address=ShippingAddress(
            full_name=form.full_name,
            email=form.email,
            address=form.address,
            city=form.city,
            state=form.state,
            zip_code=form.zip_code,
        ),
        delivery_preferences=DeliveryPreferences(
            date=form.delivery_date,
            time=form.delivery_time,
            extras=form.extras.model_copy(),
            priority_delivery=form.priority_delivery,
        ),
        payment_info=build_payment_info(form),
        total_amount=float(computed_total),
    )


def mask_order_payload(payload: dict) -> dict:
    """Copy of an order payload that is safe to log"""
    masked = copy.deepcopy(payload)
    payment = masked.get("paymentInfo") or {}
    if payment.get("cardNumber"):
        payment["cardNumber"] = "****" + str(payment["cardNumber"])[-4:]
    if "cvv" in payment:
        payment["cvv"] = "***"
    return masked


def build_booking_request(center: DaycareCenter, form: BookingForm) -> BookingRequest:
    """Booking body with the total computed from the center's daily rate"""
    total = compute_booking_total(
        date.fromisoformat(form.start_date),
        date.fromisoformat(form.end_date),
        center.price_per_day,
    )
    return BookingRequest(
        daycare_center_id=center.id,
        daycare_center=CenterSummary(
            name=center.name,
            location=center.location,
            price_per_day=center.price_per_day,
        ),
        pet_name=form.pet_name,
        pet_type=form.pet_type,
        pet_age=form.pet_age,
        email=form.email,
        mobile_number=form.mobile_number,
        start_date=form.start_date,
        end_date=form.end_date,
        special_instructions=form.special_instructions,
        total_amount=total,
    )


def build_adoption_application(pet: PetListing, form: AdoptionForm) -> AdoptionApplication:
    return AdoptionApplication(
        pet=PetSummary(
            id=str(pet.id),
            name=pet.name,
            type=pet.type,
            breed=pet.breed,
            age=pet.age,
            shelter=pet.shelter,
        ),
        personal_info=PersonalInfo(
            full_name=form.full_name,
            email=form.email,
            phone=form.phone,
            address=form.address,
        ),
        experience=Experience(
            level=form.experience,
            details=form.experience_details,
            other_pets=form.other_pets,
            other_pets_details=form.other_pets_details,
        ),
        visit_schedule=VisitSchedule(date=form.visit_date, time=form.visit_time),
        adoption_reason=form.adoption_reason,
    )

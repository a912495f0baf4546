from pawfam.models.adoption import AdoptionForm, PetListing
from pawfam.models.booking import BookingForm, DaycareCenter
from pawfam.models.checkout import PaymentMethod
from pawfam.services.payloads import (
    build_adoption_application,
    build_booking_request,
    build_order_request,
    mask_order_payload,
)
from pawfam.store.cart import CartStore


def _cart(clock, *products):
    cart = CartStore(clock=clock)
    for product in products:
        cart.add_item(product)
    return cart


def test_order_payload_wire_shape(clock, leash, bowl, card_form):
    cart = _cart(clock, leash, leash, bowl)

    payload = build_order_request(cart.lines(), card_form, cart.total()).to_payload()

    assert payload["items"] == [
        {"productId": "p1", "name": "Leash", "price": 100.0, "quantity": 2, "image": ""},
        {"productId": "p2", "name": "Bowl", "price": 50.0, "quantity": 1, "image": ""},
    ]
    assert payload["shippingAddress"] == {
        "fullName": "Asha Rao",
        "email": "asha@example.com",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "zipCode": "560001",
    }
    assert payload["deliveryPreferences"] == {
        "date": card_form.delivery_date,
        "time": "17:30",
        "extras": {"giftWrap": False, "includeReceipt": False},
        "priorityDelivery": False,
    }
    assert payload["totalAmount"] == 250.0


def test_card_details_are_sent_as_digits(card_form):
    form = card_form.model_copy(update={"cvv": " 123 "})
    payload = build_order_request([], form, 0).to_payload()

    assert payload["paymentInfo"] == {
        "method": "card",
        "cardNumber": "4111111111111111",
        "expiryDate": "12/29",
        "cvv": "123",
    }


def test_upi_payload_carries_only_upi_id(card_form):
    form = card_form.model_copy(update={"payment_method": PaymentMethod.UPI, "upi_id": "asha@okaxis"})
    payload = build_order_request([], form, 0).to_payload()

    assert payload["paymentInfo"] == {"method": "upi", "upiId": "asha@okaxis"}


def test_cash_on_delivery_payload_has_no_card_or_upi_keys(card_form):
    form = card_form.model_copy(update={"payment_method": PaymentMethod.CASH_ON_DELIVERY})
    payload = build_order_request([], form, 0).to_payload()

    assert payload["paymentInfo"] == {"method": "cod"}


def test_total_is_taken_as_given(clock, leash, card_form):
    cart = _cart(clock, leash)
    payload = build_order_request(cart.lines(), card_form, 42.0).to_payload()
    assert payload["totalAmount"] == 42.0


def test_mask_hides_card_number_and_cvv(card_form):
    payload = build_order_request([], card_form, 0).to_payload()

    masked = mask_order_payload(payload)

    assert masked["paymentInfo"]["cardNumber"] == "****1111"
    assert masked["paymentInfo"]["cvv"] == "***"
    # Original payload is untouched
    assert payload["paymentInfo"]["cardNumber"] == "4111111111111111"


def test_booking_request_totals_days_times_rate():
    center = DaycareCenter(id="c1", name="Happy Paws", location="Indiranagar", price_per_day=500)
    form = BookingForm(
        pet_name="Bruno",
        pet_type="dog",
        pet_age="3",
        email="asha@example.com",
        mobile_number="9876543210",
        start_date="2026-11-01",
        end_date="2026-11-03",
    )

    payload = build_booking_request(center, form).to_payload()

    assert payload["daycareCenterId"] == "c1"
    assert payload["daycareCenter"] == {
        "name": "Happy Paws",
        "location": "Indiranagar",
        "pricePerDay": 500.0,
    }
    assert payload["petName"] == "Bruno"
    assert payload["mobileNumber"] == "9876543210"
    assert payload["totalAmount"] == 1000.0


def test_adoption_application_shape():
    pet = PetListing(id="pet-1", name="Milo", type="Cat", breed="Indie", age="2 years", shelter="Happy Tails")
    form = AdoptionForm(
        full_name="Asha Rao",
        email="asha@example.com",
        phone="9876543210",
        address="12 MG Road",
        experience="first-time",
        visit_date="2026-11-02",
        visit_time="11:00",
        adoption_reason="Company",
        other_pets="no",
    )

    payload = build_adoption_application(pet, form).to_payload()

    assert payload["pet"] == {
        "id": "pet-1",
        "name": "Milo",
        "type": "Cat",
        "breed": "Indie",
        "age": "2 years",
        "shelter": "Happy Tails",
    }
    assert payload["personalInfo"]["fullName"] == "Asha Rao"
    assert payload["experience"] == {
        "level": "first-time",
        "details": "",
        "otherPets": "no",
        "otherPetsDetails": "",
    }
    assert payload["visitSchedule"] == {"date": "2026-11-02", "time": "11:00"}
    assert payload["adoptionReason"] == "Company"

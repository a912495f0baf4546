"""
Form Validation

Field rules for the checkout, booking, adoption and password reset forms.
Every validator returns an error map: field name -> message. A field that
is absent from the map is valid.
"""

import re
from datetime import date, datetime, time
from typing import Any, Optional

from ..models.adoption import AdoptionForm
from ..models.booking import BookingForm
from ..models.checkout import AddressUpdateRequest, CheckoutForm, PaymentMethod

ErrorMap = dict[str, str]

ALPHA_SPACE = re.compile(r"[A-Za-z\s]+", re.ASCII)
EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
ZIP_CODE = re.compile(r"\d{6}", re.ASCII)
CARD_DIGITS = re.compile(r"\d{14,16}", re.ASCII)
EXPIRY = re.compile(r"\d{2}/\d{2}", re.ASCII)
CVV = re.compile(r"\d{3}", re.ASCII)
UPI_ID = re.compile(r"[a-zA-Z0-9.\-_]{2,256}@[a-zA-Z][a-zA-Z]{2,64}")
MOBILE = re.compile(r"(\+91|91)?[6-9]\d{9}", re.ASCII)
OTP = re.compile(r"\d{6}", re.ASCII)
PASSWORD_SPECIAL = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

DELIVERY_WINDOW_START = time(17, 0)
DELIVERY_WINDOW_END = time(19, 0)

CHECKOUT_FIELDS = (
    "full_name",
    "email",
    "address",
    "city",
    "state",
    "zip_code",
    "delivery_date",
    "delivery_time",
    "card_number",
    "expiry_date",
    "cvv",
    "upi_id",
)

CARD_FIELDS = ("card_number", "expiry_date", "cvv")

LABELS = {
    "full_name": "Full Name",
    "email": "Email",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip_code": "ZIP Code",
    "delivery_date": "Delivery date",
    "delivery_time": "Delivery time",
    "card_number": "Card Number",
    "expiry_date": "Expiry Date",
    "cvv": "CVV",
    "upi_id": "UPI ID",
}


def digits_only(value: str) -> str:
    """Strip everything but digits"""
    return re.sub(r"[^0-9]", "", value or "")


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _required(name: str) -> str:
    return f"{LABELS.get(name, name)} is required"


def _check_letters(name: str, value: str) -> Optional[str]:
    if _blank(value):
        return _required(name)
    if not ALPHA_SPACE.fullmatch(value):
        return f"{LABELS[name]} must contain only letters and spaces"
    return None


def _check_email(value: str) -> Optional[str]:
    if _blank(value):
        return _required("email")
    if not EMAIL.fullmatch(value.strip()):
        return "Please enter a valid email address"
    return None


def _check_zip_code(value: str) -> Optional[str]:
    if _blank(value):
        return _required("zip_code")
    if not ZIP_CODE.fullmatch(value):
        return "ZIP Code must be exactly 6 digits"
    return None


def _check_card_number(value: str) -> Optional[str]:
    digits = digits_only(value)
    if not digits:
        return _required("card_number")
    if not CARD_DIGITS.fullmatch(digits):
        return "Card Number must be 14 to 16 digits"
    return None


def _check_expiry_date(value: str) -> Optional[str]:
    if _blank(value):
        return _required("expiry_date")
    if not EXPIRY.fullmatch(value):
        return "Expiry Date must be in MM/YY format"
    month = int(value.split("/")[0])
    if month < 1 or month > 12:
        return "Expiry month must be between 01 and 12"
    return None


def _check_cvv(value: str) -> Optional[str]:
    digits = digits_only(value)
    if not digits:
        return _required("cvv")
    if not CVV.fullmatch(digits):
        return "CVV must be exactly 3 digits"
    return None


def _check_upi_id(value: str) -> Optional[str]:
    if _blank(value):
        return _required("upi_id")
    if not UPI_ID.fullmatch(value):
        return "Invalid UPI ID format. Example: username@bank"
    return None


def _check_delivery_date(value: str, today: date) -> Optional[str]:
    if _blank(value):
        return _required("delivery_date")
    try:
        requested = date.fromisoformat(value)
    except ValueError:
        return "Delivery date must be a valid date"
    if requested < today:
        return "Delivery date cannot be in the past"
    return None


def _check_delivery_time(value: str) -> Optional[str]:
    if _blank(value):
        return _required("delivery_time")
    try:
        requested = datetime.strptime(value, "%H:%M").time()
    except ValueError:
        return "Delivery time must be in HH:MM format"
    if not DELIVERY_WINDOW_START <= requested <= DELIVERY_WINDOW_END:
        return "Delivery time must be between 17:00 and 19:00"
    return None


def validate_field(
    name: str,
    value: Any,
    form: CheckoutForm,
    today: Optional[date] = None,
) -> Optional[str]:
    """
    Validate one checkout field.

    Args:
        name: Field name on CheckoutForm
        value: Current value of the field
        form: Form snapshot, consulted for the selected payment method
        today: Reference date for delivery_date (defaults to date.today())

    Returns:
        Error message, or None when the field is valid or not applicable
    """
    today = today or date.today()
    value = "" if value is None else value

    if name in ("full_name", "city", "state"):
        return _check_letters(name, value)
    if name == "email":
        return _check_email(value)
    if name == "address":
        return _required(name) if _blank(value) else None
    if name == "zip_code":
        return _check_zip_code(value)
    if name == "delivery_date":
        return _check_delivery_date(value, today)
    if name == "delivery_time":
        return _check_delivery_time(value)

    # Payment fields only count for the selected method
    if name in CARD_FIELDS:
        if form.payment_method != PaymentMethod.CARD:
            return None
        if name == "card_number":
            return _check_card_number(value)
        if name == "expiry_date":
            return _check_expiry_date(value)
        return _check_cvv(value)
    if name == "upi_id":
        if form.payment_method != PaymentMethod.UPI:
            return None
        return _check_upi_id(value)

    return None


def validate_all(form: CheckoutForm, today: Optional[date] = None) -> ErrorMap:
    """Run every checkout rule, whether or not the field was touched"""
    errors: ErrorMap = {}
    for name in CHECKOUT_FIELDS:
        error = validate_field(name, getattr(form, name), form, today=today)
        if error:
            errors[name] = error
    return errors


def validate_address_update(address: AddressUpdateRequest) -> ErrorMap:
    """Order address change only checks the ZIP code client-side"""
    if not ZIP_CODE.fullmatch(address.zip_code or ""):
        return {"zip_code": "ZIP Code must be exactly 6 digits"}
    return {}


def validate_booking(form: BookingForm) -> ErrorMap:
    """Daycare booking contact and date checks"""
    errors: ErrorMap = {}

    if _blank(form.email):
        errors["email"] = "Email is required"
    elif not EMAIL.fullmatch(form.email.strip()):
        errors["email"] = "Please enter a valid email address"

    if _blank(form.mobile_number):
        errors["mobile_number"] = "Mobile number is required"
    elif not MOBILE.fullmatch(re.sub(r"\s", "", form.mobile_number)):
        errors["mobile_number"] = "Please enter a valid 10-digit mobile number"

    start = _parse_date(form.start_date)
    end = _parse_date(form.end_date)
    if start is None:
        errors["start_date"] = _date_error("Start date", form.start_date)
    if end is None:
        errors["end_date"] = _date_error("End date", form.end_date)
    elif start is not None and end < start:
        errors["end_date"] = "End date cannot be before start date"

    return errors


def validate_adoption(form: AdoptionForm) -> ErrorMap:
    """Adoption application checks"""
    errors: ErrorMap = {}

    for key in ("full_name", "phone", "email", "address", "experience", "visit_date", "visit_time"):
        if _blank(getattr(form, key)):
            errors[key] = "This field is required"

    if form.other_pets == "yes" and _blank(form.other_pets_details):
        errors["other_pets_details"] = "Please describe your other pets"

    if len(digits_only(form.phone)) < 10:
        errors["phone"] = "Enter a valid phone number (at least 10 digits)"

    if not EMAIL.fullmatch((form.email or "").strip()):
        errors["email"] = "Enter a valid email address"

    if not form.terms_accepted_consent:
        errors["terms_accepted_consent"] = "Please acknowledge application terms"
    if not form.terms_accepted_care:
        errors["terms_accepted_care"] = "Please agree to provide a safe environment"

    return errors


def password_checks(password: str) -> dict[str, bool]:
    """Individual password strength requirements"""
    return {
        "length": len(password) >= 8,
        "uppercase": bool(re.search(r"[A-Z]", password)),
        "lowercase": bool(re.search(r"[a-z]", password)),
        "number": bool(re.search(r"[0-9]", password)),
        "special": bool(PASSWORD_SPECIAL.search(password)),
    }


def validate_new_password(password: str, confirmation: str) -> ErrorMap:
    if not all(password_checks(password).values()):
        return {"password": "Password must meet all requirements"}
    if password != confirmation:
        return {"confirm_password": "Passwords do not match"}
    return {}


def validate_otp(otp: str) -> ErrorMap:
    if not OTP.fullmatch(otp or ""):
        return {"otp": "Please enter a valid 6-digit OTP"}
    return {}


def validate_email(email: str) -> ErrorMap:
    if not EMAIL.fullmatch(email or ""):
        return {"email": "Please enter a valid email address"}
    return {}


def _parse_date(value: str) -> Optional[date]:
    if _blank(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _date_error(label: str, value: str) -> str:
    if _blank(value):
        return f"{label} is required"
    return f"{label} must be a valid date"

"""Session state for storefront visitors"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from ..models.booking import BookingForm, BookingMode, DaycareCenter, SavedPet
from ..models.checkout import CheckoutForm
from ..store.cart import CartStore
from .config import settings


class InvalidTransitionError(Exception):
    """A flow was asked to move from a state that does not allow it"""
    pass


class PasswordResetState(str, Enum):
    """Steps of the forgot-password flow"""
    EMAIL_ENTRY = "email_entry"
    OTP_PENDING = "otp_pending"
    PASSWORD_ENTRY = "password_entry"
    DONE = "done"


@dataclass
class PasswordResetFlow:
    """
    Email -> OTP -> new password -> done.

    The only ways off the straight line are going back one step and resending
    the OTP, which restarts the countdown without changing state.
    """
    countdown_seconds: int = 600
    clock: Callable[[], float] = time.monotonic
    state: PasswordResetState = PasswordResetState.EMAIL_ENTRY
    email: str = ""
    otp: str = ""
    countdown_ends_at: Optional[float] = None

    _PREVIOUS = {
        PasswordResetState.OTP_PENDING: PasswordResetState.EMAIL_ENTRY,
        PasswordResetState.PASSWORD_ENTRY: PasswordResetState.OTP_PENDING,
    }

    def require(self, *states: PasswordResetState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransitionError(
                f"Password reset is in state {self.state.value}, expected {allowed}"
            )

    def otp_sent(self, email: str) -> None:
        self.require(PasswordResetState.EMAIL_ENTRY)
        self.email = email
        self.state = PasswordResetState.OTP_PENDING
        self.countdown_ends_at = self.clock() + self.countdown_seconds

    def resend(self) -> None:
        self.require(PasswordResetState.OTP_PENDING)
        self.countdown_ends_at = self.clock() + self.countdown_seconds

    def otp_verified(self, otp: str) -> None:
        self.require(PasswordResetState.OTP_PENDING)
        self.otp = otp
        self.state = PasswordResetState.PASSWORD_ENTRY

    def password_reset(self) -> None:
        self.require(PasswordResetState.PASSWORD_ENTRY)
        self.state = PasswordResetState.DONE
        self.otp = ""
        self.countdown_ends_at = None

    def back(self) -> None:
        self.require(*self._PREVIOUS)
        self.state = self._PREVIOUS[self.state]
        if self.state == PasswordResetState.EMAIL_ENTRY:
            self.countdown_ends_at = None
        self.otp = ""

    def seconds_remaining(self) -> int:
        if self.countdown_ends_at is None:
            return 0
        return max(0, int(round(self.countdown_ends_at - self.clock())))


@dataclass
class BookingFlow:
    """Daycare booking in progress: chosen center, pet source and form"""
    center: Optional[DaycareCenter] = None
    mode: BookingMode = BookingMode.UNSELECTED
    saved_pet_id: Optional[str] = None
    form: BookingForm = field(default_factory=BookingForm)

    def select_center(self, center: DaycareCenter) -> None:
        self.center = center

    def select_mode(self, mode: BookingMode) -> None:
        self.mode = mode
        if mode == BookingMode.MANUAL:
            # Contact details and dates survive, the pet does not
            self.form = self.form.model_copy(update={"pet_name": "", "pet_type": "", "pet_age": ""})
            self.saved_pet_id = None

    def select_saved_pet(self, pet: SavedPet) -> None:
        self.saved_pet_id = pet.id
        self.form = self.form.model_copy(
            update={"pet_name": pet.name, "pet_type": pet.category, "pet_age": str(pet.age or "")}
        )

    def update_form(self, form: BookingForm) -> None:
        # An end date before the new start date is cleared
        if form.start_date and form.end_date and form.end_date < form.start_date:
            form = form.model_copy(update={"end_date": ""})
        self.form = form

    def reset(self, email: str = "", mobile_number: str = "") -> None:
        self.center = None
        self.mode = BookingMode.UNSELECTED
        self.saved_pet_id = None
        self.form = BookingForm(email=email, mobile_number=mobile_number)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StorefrontSession:
    """One visitor's cart and in-progress flows"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartStore = field(default_factory=lambda: CartStore(settings.cart_notice_seconds))
    checkout: CheckoutForm = field(default_factory=CheckoutForm)
    checkout_errors: dict[str, str] = field(default_factory=dict)
    booking: BookingFlow = field(default_factory=BookingFlow)
    password_reset: PasswordResetFlow = field(
        default_factory=lambda: PasswordResetFlow(settings.otp_countdown_seconds)
    )
    loading: bool = False

    def touch(self) -> None:
        self.updated_at = _now()

    def reset_checkout(self) -> None:
        """Fresh checkout form after an order went through"""
        self.checkout = CheckoutForm()
        self.checkout_errors = {}

    def restart_password_reset(self) -> None:
        self.password_reset = PasswordResetFlow(
            self.password_reset.countdown_seconds,
            self.password_reset.clock,
        )


class SessionManager:
    """
    Manages storefront sessions.

    Creating a session first drops every session idle for longer than
    max_age_hours, so abandoned carts do not accumulate.
    """

    def __init__(self, max_age_hours: Optional[float] = None):
        self.sessions: dict[str, StorefrontSession] = {}
        self.max_age_hours = settings.session_max_age_hours if max_age_hours is None else max_age_hours

    def create_session(self) -> StorefrontSession:
        self.cleanup_old_sessions(self.max_age_hours)
        now = _now()
        session = StorefrontSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[StorefrontSession]:
        return self.sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    def cleanup_old_sessions(self, max_age_hours: float) -> int:
        """Remove sessions not touched within max_age_hours"""
        now = _now()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            del self.sessions[sid]
        return len(old_sessions)

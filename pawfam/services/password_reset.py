"""Forgot-password flow backed by the auth API"""

import logging

from ..core.session import PasswordResetFlow, PasswordResetState
from ..models.checkout import SubmissionResult
from .api_client import PawFamAPIError, PawFamClient
from .submission import resolve_api_error
from .validation import validate_email, validate_new_password, validate_otp

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Moves a PasswordResetFlow forward as the backend confirms each step"""

    def __init__(self, client: PawFamClient):
        self.client = client

    async def request_otp(self, flow: PasswordResetFlow, email: str) -> SubmissionResult:
        flow.require(PasswordResetState.EMAIL_ENTRY)
        errors = validate_email(email)
        if errors:
            return SubmissionResult(success=False, errors=errors)

        try:
            await self.client.send_password_reset_otp(email)
        except PawFamAPIError as e:
            return resolve_api_error(e, "Failed to send OTP. Please try again.")

        flow.otp_sent(email)
        return SubmissionResult(
            success=True,
            notice=(
                "A 6-digit OTP has been sent to your email. "
                "The OTP will expire in 10 minutes."
            ),
        )

    async def resend_otp(self, flow: PasswordResetFlow) -> SubmissionResult:
        flow.require(PasswordResetState.OTP_PENDING)
        try:
            await self.client.send_password_reset_otp(flow.email)
        except PawFamAPIError as e:
            return resolve_api_error(e, "Failed to resend OTP. Please try again.")

        flow.resend()
        return SubmissionResult(success=True, notice="A new OTP has been sent to your email.")

    async def verify_otp(self, flow: PasswordResetFlow, otp: str) -> SubmissionResult:
        flow.require(PasswordResetState.OTP_PENDING)
        errors = validate_otp(otp)
        if errors:
            return SubmissionResult(success=False, errors=errors)

        try:
            response = await self.client.verify_password_reset_otp(flow.email, otp)
        except PawFamAPIError as e:
            result = resolve_api_error(e, "Invalid or expired OTP. Please try again.")
            return SubmissionResult(success=False, errors={"otp": result.notice or ""})

        if not (isinstance(response, dict) and response.get("verified")):
            return SubmissionResult(success=False, errors={"otp": "Invalid or expired OTP. Please try again."})

        flow.otp_verified(otp)
        return SubmissionResult(
            success=True,
            notice="OTP verified successfully! Please enter your new password.",
        )

    async def reset_password(
        self,
        flow: PasswordResetFlow,
        new_password: str,
        confirm_password: str,
    ) -> SubmissionResult:
        flow.require(PasswordResetState.PASSWORD_ENTRY)
        errors = validate_new_password(new_password, confirm_password)
        if errors:
            return SubmissionResult(success=False, errors=errors)

        logger.info(f"Resetting password for {flow.email}")
        try:
            response = await self.client.reset_password(flow.email, flow.otp, new_password)
        except PawFamAPIError as e:
            return resolve_api_error(e, "Failed to reset password. Please try again.")

        if not (isinstance(response, dict) and response.get("success")):
            message = response.get("message") if isinstance(response, dict) else None
            return SubmissionResult(
                success=False,
                notice=message or "Failed to reset password. Please try again.",
            )

        flow.password_reset()
        return SubmissionResult(
            success=True,
            notice=(
                "Your password has been reset successfully. "
                "You can now login with your new password."
            ),
        )

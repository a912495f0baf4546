"""Login and forgot-password routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..core.session import InvalidTransitionError, StorefrontSession
from ..models.checkout import SubmissionResult
from ..services.api_client import PawFamAPIError, PawFamClient
from ..services.password_reset import PasswordResetService
from ..services.submission import resolve_api_error
from .deps import api_error_to_http, get_client, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def get_password_reset_service(client: PawFamClient = Depends(get_client)) -> PasswordResetService:
    return PasswordResetService(client)


class LoginRequest(BaseModel):
    email: str
    password: str
    vendor: bool = False


class EmailRequest(BaseModel):
    email: str


class OtpRequest(BaseModel):
    otp: str


class NewPasswordRequest(BaseModel):
    new_password: str
    confirm_password: str


class PasswordResetStatus(BaseModel):
    state: str
    email: str
    seconds_remaining: int


@router.post("/login", response_model=SubmissionResult)
async def login(request: LoginRequest, client: PawFamClient = Depends(get_client)):
    """Log in a customer (or a vendor) and keep the returned token"""
    credentials = {"email": request.email, "password": request.password}
    try:
        if request.vendor:
            data = await client.vendor_login(credentials)
        else:
            data = await client.login(credentials)
    except PawFamAPIError as e:
        logger.warning(f"Login failed for {request.email}: {e}")
        return resolve_api_error(e, "Login failed. Please check your credentials.")

    user = data.get("user") if isinstance(data, dict) else None
    return SubmissionResult(success=True, notice="Logged in successfully", data={"user": user})


@router.post("/logout")
async def logout(client: PawFamClient = Depends(get_client)):
    client.logout()
    return {"message": "Logged out"}


@router.get("/me")
async def current_user(client: PawFamClient = Depends(get_client)):
    """
    Logged-in user as confirmed by the backend, or null when nobody is
    logged in. A rejected token clears the stored login and answers 401.
    """
    try:
        user = await client.refresh_current_user()
    except PawFamAPIError as e:
        raise api_error_to_http(e)
    return {"user": user, "role": client.credentials.role}


def _reset_status(session: StorefrontSession) -> PasswordResetStatus:
    flow = session.password_reset
    return PasswordResetStatus(
        state=flow.state.value,
        email=flow.email,
        seconds_remaining=flow.seconds_remaining(),
    )


@router.get("/password-reset", response_model=PasswordResetStatus)
async def password_reset_status(session: StorefrontSession = Depends(get_session)):
    return _reset_status(session)


@router.post("/password-reset/otp", response_model=SubmissionResult)
async def request_otp(
    request: EmailRequest,
    session: StorefrontSession = Depends(get_session),
    service: PasswordResetService = Depends(get_password_reset_service),
):
    """Send a reset OTP to the given email"""
    try:
        return await service.request_otp(session.password_reset, request.email)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/password-reset/resend", response_model=SubmissionResult)
async def resend_otp(
    session: StorefrontSession = Depends(get_session),
    service: PasswordResetService = Depends(get_password_reset_service),
):
    try:
        return await service.resend_otp(session.password_reset)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/password-reset/verify", response_model=SubmissionResult)
async def verify_otp(
    request: OtpRequest,
    session: StorefrontSession = Depends(get_session),
    service: PasswordResetService = Depends(get_password_reset_service),
):
    try:
        return await service.verify_otp(session.password_reset, request.otp)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/password-reset/password", response_model=SubmissionResult)
async def reset_password(
    request: NewPasswordRequest,
    session: StorefrontSession = Depends(get_session),
    service: PasswordResetService = Depends(get_password_reset_service),
):
    try:
        return await service.reset_password(
            session.password_reset,
            request.new_password,
            request.confirm_password,
        )
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/password-reset/back", response_model=PasswordResetStatus)
async def go_back(session: StorefrontSession = Depends(get_session)):
    """Return to the previous step of the reset flow"""
    try:
        session.password_reset.back()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _reset_status(session)


@router.delete("/password-reset", response_model=PasswordResetStatus)
async def restart_password_reset(session: StorefrontSession = Depends(get_session)):
    """Abandon the flow and start again from email entry"""
    session.restart_password_reset()
    return _reset_status(session)

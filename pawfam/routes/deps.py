"""Request dependencies shared by the routers"""

from typing import Optional

from fastapi import Header, HTTPException, Request

from ..core.session import SessionManager, StorefrontSession
from ..services.api_client import PawFamAPIError, PawFamClient, SessionExpiredError


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_client(request: Request) -> PawFamClient:
    return request.app.state.client


def get_session(
    request: Request,
    x_session_id: Optional[str] = Header(None),
) -> StorefrontSession:
    """Session named by the X-Session-ID header"""
    session = get_session_manager(request).get_session(x_session_id) if x_session_id else None
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    session.touch()
    return session


def api_error_to_http(error: PawFamAPIError) -> HTTPException:
    """Map a failed backend read onto a response for the front end"""
    if isinstance(error, SessionExpiredError):
        return HTTPException(status_code=401, detail=error.message)
    return HTTPException(status_code=502, detail=str(error) or "Backend request failed")

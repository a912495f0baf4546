"""Storefront session routes"""

from fastapi import APIRouter, Depends, HTTPException

from ..core.session import SessionManager
from .deps import get_session_manager

router = APIRouter(prefix="/api/session", tags=["Session"])


@router.post("")
async def create_session(sessions: SessionManager = Depends(get_session_manager)):
    """Start a session; send its id back in the X-Session-ID header"""
    session = sessions.create_session()
    return {"session_id": session.session_id}


@router.get("/{session_id}")
async def get_session_details(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
):
    """Get session details"""
    session = sessions.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    return {
        "session_id": session.session_id,
        "created_at": session.created_at.isoformat(),
        "updated_at": session.updated_at.isoformat(),
        "cart": {
            "items_count": session.cart.item_count(),
            "total": session.cart.total(),
        },
        "checkout_errors": session.checkout_errors,
        "booking_mode": session.booking.mode.value,
        "password_reset_state": session.password_reset.state.value,
        "loading": session.loading,
    }


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
):
    """Delete a session"""
    if sessions.delete_session(session_id):
        return {"message": "Session deleted"}
    raise HTTPException(status_code=404, detail="Session not found")

"""
Credential Storage

Durable storage for the bearer token and the cached user record. The file
is read once at startup, rewritten on login and removed on logout or when
the backend answers 401.
"""

import json
import logging
import os
import time
from typing import Optional

import jwt

logger = logging.getLogger(__name__)


class CredentialStore:
    """JSON file holding {"token": ..., "user": {...}}"""

    def __init__(self, path: str):
        self.path = path
        self._token: Optional[str] = None
        self._user: Optional[dict] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[dict]:
        return self._user

    @property
    def role(self) -> Optional[str]:
        """customer or vendor, from the cached user record"""
        return (self._user or {}).get("role")

    def load(self) -> None:
        """Read stored credentials, discarding an expired token"""
        if not os.path.exists(self.path):
            return

        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable credentials file {self.path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Ignoring credentials file {self.path}: expected an object")
            return

        token = data.get("token")
        user = data.get("user")
        if not isinstance(token, str) or not isinstance(user, (dict, type(None))):
            logger.warning(f"Ignoring credentials file {self.path}: malformed token or user")
            return

        if token_expired(token):
            logger.info("Stored token has expired, clearing credentials")
            self.clear()
            return

        self._token = token
        self._user = user

    def save(self, token: str, user: Optional[dict] = None) -> None:
        self._token = token
        self._user = user

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({"token": token, "user": user}, f)

    def clear(self) -> None:
        self._token = None
        self._user = None
        if os.path.exists(self.path):
            os.remove(self.path)


def token_expired(token: str, now: Optional[float] = None) -> bool:
    """
    Check the exp claim of a JWT without verifying its signature.

    Opaque (non-JWT) tokens and tokens without exp are treated as live; the
    backend remains the authority and answers 401 when they are not.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.DecodeError:
        return False

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return False
    return (now if now is not None else time.time()) >= exp

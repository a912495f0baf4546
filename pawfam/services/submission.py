"""Shared handling for form submissions"""

import logging
import re
from contextlib import contextmanager
from typing import Iterator

from ..models.checkout import SubmissionResult
from .api_client import ApplicationError, PawFamAPIError, SessionExpiredError, TransportError

logger = logging.getLogger(__name__)

NETWORK_ERROR_NOTICE = "Network error: could not reach the server. Please try again."


class SubmissionInProgressError(Exception):
    """A submission for this session is already in flight"""
    pass


@contextmanager
def submission_guard(session) -> Iterator[None]:
    """Hold the session's loading flag for the duration of one submission"""
    if session.loading:
        raise SubmissionInProgressError("A submission is already in progress")
    session.loading = True
    try:
        yield
    finally:
        session.loading = False


def camel_to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def field_errors_to_map(field_errors: list) -> dict[str, str]:
    """
    Map backend validation errors onto form field names.

    Errors look like {"msg": ..., "param": "shippingAddress.zipCode"}; newer
    validators send "path" instead of "param". Only the last segment is kept
    so server errors land on the same keys as local validation.
    """
    errors: dict[str, str] = {}
    for item in field_errors:
        if not isinstance(item, dict):
            continue
        param = item.get("param") or item.get("path")
        if not param:
            continue
        key = camel_to_snake(str(param).split(".")[-1])
        errors[key] = str(item.get("msg") or "Invalid value")
    return errors


def resolve_api_error(error: PawFamAPIError, fallback: str) -> SubmissionResult:
    """Turn an API failure into state the front end can render"""
    if isinstance(error, TransportError):
        return SubmissionResult(success=False, notice=NETWORK_ERROR_NOTICE)

    if isinstance(error, SessionExpiredError):
        return SubmissionResult(success=False, notice=error.message)

    if isinstance(error, ApplicationError):
        if error.field_errors:
            messages = [
                str(item.get("msg")) if isinstance(item, dict) and item.get("msg") else str(item)
                for item in error.field_errors
            ]
            return SubmissionResult(
                success=False,
                errors=field_errors_to_map(error.field_errors),
                notice="Server validation errors:\n" + "\n".join(messages),
            )
        return SubmissionResult(success=False, notice=error.message or fallback)

    return SubmissionResult(success=False, notice=fallback)

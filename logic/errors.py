"""Failure classification and the user-facing text for each failure kind."""

from __future__ import annotations

import asyncio
from typing import Dict

from google.api_core import exceptions as api_exceptions

from models.weather import ErrorKind, QueryResult

USER_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.CONFIGURATION_ERROR: (
        "The weather feature is not configured. Set the GOOGLE_API_KEY environment variable "
        "for this deployment, then redeploy or restart the service."
    ),
    ErrorKind.EMPTY_RESPONSE: (
        "The weather service returned an empty answer. It may be temporarily unavailable; "
        "please try again later."
    ),
    ErrorKind.MALFORMED_RESPONSE: (
        "The weather service returned data in an unexpected format. Please try a different location."
    ),
    ErrorKind.LOCATION_NOT_FOUND: (
        "Sorry, we could not find weather data for that location. Please try a different city."
    ),
    ErrorKind.INCOMPLETE_DATA: "The weather service returned incomplete data. Please try again.",
    ErrorKind.INVALID_CREDENTIAL: (
        "The configured API key was rejected. Check the GOOGLE_API_KEY value for typos or "
        "extra spaces, then redeploy."
    ),
    ErrorKind.SERVICE_UNAVAILABLE: (
        "The weather service is temporarily unavailable. Please try again in a few minutes."
    ),
    ErrorKind.UNKNOWN: "An unexpected error occurred while fetching weather data.",
}

_CREDENTIAL_REJECTIONS = (api_exceptions.PermissionDenied, api_exceptions.Unauthenticated)
_TRANSPORT_FAILURES = (
    api_exceptions.ServerError,
    api_exceptions.DeadlineExceeded,
    api_exceptions.RetryError,
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
)
_INVALID_KEY_REASON = "API_KEY_INVALID"

# Failures the backend boundary turns into a result instead of raising.
BACKEND_FAILURES = (api_exceptions.GoogleAPIError, ConnectionError, TimeoutError, asyncio.TimeoutError)


def user_message_for(kind: ErrorKind) -> str:
    return USER_MESSAGES[kind]


def _status_code(exc: BaseException) -> int | None:
    code = getattr(exc, "code", None)
    try:
        return int(code) if code is not None else None
    except (TypeError, ValueError):
        return None


def classify_backend_error(exc: BaseException) -> QueryResult:
    """Map a transport or credential failure onto a classified result.

    Credential rejection and transport failure are told apart by exception
    type; anything else keeps its original message as ``Unknown``.
    """

    detail = str(exc) or exc.__class__.__name__
    if isinstance(exc, _CREDENTIAL_REJECTIONS):
        return QueryResult.failure(ErrorKind.INVALID_CREDENTIAL, detail)
    if isinstance(exc, api_exceptions.InvalidArgument) and getattr(exc, "reason", None) == _INVALID_KEY_REASON:
        return QueryResult.failure(ErrorKind.INVALID_CREDENTIAL, detail)
    if isinstance(exc, _TRANSPORT_FAILURES):
        return QueryResult.failure(ErrorKind.SERVICE_UNAVAILABLE, detail)
    status = _status_code(exc)
    if status is not None and 500 <= status <= 599:
        return QueryResult.failure(ErrorKind.SERVICE_UNAVAILABLE, detail)
    return QueryResult.failure(ErrorKind.UNKNOWN, detail)


__all__ = ["BACKEND_FAILURES", "USER_MESSAGES", "classify_backend_error", "user_message_for"]

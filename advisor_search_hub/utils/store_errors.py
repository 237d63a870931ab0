"""User-facing messages for document-store failures.

Store exceptions are passed through unchanged by the monitors; these helpers
let the caller turn one into a message and decide how to present it.
"""

import logging
from typing import Any

from pydantic import BaseModel

from .errors import format_exception

logger = logging.getLogger(__name__)

STORE_ERROR_MESSAGES = {
    "permission-denied": "You do not have permission to perform this action.",
    "not-found": "The requested data was not found.",
    "already-exists": "This data already exists.",
    "resource-exhausted": "Too many requests. Please try again later.",
    "failed-precondition": "Operation failed due to invalid conditions.",
    "aborted": "Operation was aborted. Please try again.",
    "out-of-range": "Request is outside valid range.",
    "unimplemented": "This feature is not yet implemented.",
    "internal": "Internal server error. Please try again later.",
    "unavailable": "Service is temporarily unavailable.",
    "data-loss": "Data corruption detected. Please contact support.",
    "unauthenticated": "You must be logged in to perform this action.",
    "invalid-argument": "Invalid data provided. Please check your input.",
    "deadline-exceeded": "Request timed out. Please try again.",
    "cancelled": "Operation was cancelled.",
}

DEFAULT_MESSAGES = {
    "auth": "Authentication error. Please try logging in again.",
    "store": "Database error. Please try again later.",
    "storage": "File operation failed. Please try again.",
    "network": "Network error. Please check your connection and try again.",
    "unknown": "An unexpected error occurred. Please try again.",
}

RETRYABLE_CODES = frozenset(
    {
        "network-request-failed",
        "unavailable",
        "deadline-exceeded",
        "resource-exhausted",
        "aborted",
        "cancelled",
    }
)

MAX_PASSTHROUGH_LENGTH = 200


class StoreErrorDetails(BaseModel):
    """How a store failure should be presented to the user."""

    message: str
    can_retry: bool
    code: str
    is_auth_error: bool
    is_permanent: bool


def error_code(error: BaseException | None) -> str | None:
    """The store error code carried by ``error``, if any."""
    code = getattr(error, "code", None)
    return code if isinstance(code, str) and code else None


def get_error_message(error: BaseException | None) -> str:
    """User-friendly message for a store exception."""
    if error is None:
        return DEFAULT_MESSAGES["unknown"]

    code = error_code(error)
    if code and code in STORE_ERROR_MESSAGES:
        return STORE_ERROR_MESSAGES[code]

    message = str(error)
    if "network" in message.lower():
        return DEFAULT_MESSAGES["network"]

    if code:
        if code.startswith("auth/"):
            return DEFAULT_MESSAGES["auth"]
        if code.startswith("storage/"):
            return DEFAULT_MESSAGES["storage"]
        return DEFAULT_MESSAGES["store"]

    if message and len(message) < MAX_PASSTHROUGH_LENGTH and "Firebase" not in message:
        return message

    return DEFAULT_MESSAGES["unknown"]


def handle_store_error(
    error: BaseException,
    context: str = "Unknown",
    metadata: dict[str, Any] | None = None,
) -> StoreErrorDetails:
    """Log a store failure and describe how to present it.

    Nothing here retries; ``can_retry`` only tells the caller whether offering
    a retry makes sense.
    """
    logger.error(
        f"[{context}] Store error: {format_exception(error)}",
        extra={"store_metadata": metadata or {}},
    )

    code = error_code(error)
    can_retry = code in RETRYABLE_CODES
    return StoreErrorDetails(
        message=get_error_message(error),
        can_retry=can_retry,
        code=code or "unknown",
        is_auth_error=bool(code and code.startswith("auth/")),
        is_permanent=not can_retry
        and code not in {"network-request-failed", "cancelled"},
    )

"""
Display text for failed API calls and other caught errors.
"""

from typing import Any, Optional

from agentchat.core.exceptions import ApiError


def message_text(message: Any) -> Optional[str]:
    """Flatten a response `message` field; validation errors arrive as a list"""
    if isinstance(message, (list, tuple)):
        message = ", ".join(str(item) for item in message if item is not None and str(item))
    if not message:
        return None
    return str(message)


def _message_for_status(status: Optional[int]) -> Optional[str]:
    """Generic user-facing text for well-known HTTP failure statuses"""
    if not isinstance(status, int) or isinstance(status, bool):
        return None
    if status == 401:
        return "Unauthorized"
    if status == 403:
        return "Access denied"
    if status == 404:
        return "Not found"
    if status >= 500:
        return "Server error"
    return None


def extract_error_message(error: Any, default_message: str) -> str:
    """
    Turn whatever a failed call raised into a message fit for display.

    An explicit message always wins; otherwise a known HTTP status maps to
    generic text; anything unrecognized yields `default_message`.
    """
    if error is None:
        return default_message

    if isinstance(error, str):
        return error or default_message

    if isinstance(error, ApiError):
        return error.message or _message_for_status(error.status) or default_message

    if isinstance(error, BaseException):
        return str(error) or default_message

    if isinstance(error, dict):
        message = error.get("message")
        status = error.get("status")
    else:
        message = getattr(error, "message", None)
        status = getattr(error, "status", None)

    text = message_text(message)
    if text:
        return text

    return _message_for_status(status) or default_message

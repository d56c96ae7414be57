"""Turn any exception into a message that is safe to show to the user."""

from typing import Any

from pydantic import ValidationError

from storefront.domain.exceptions import StorefrontException

UNKNOWN_ERROR_MESSAGE = "Something went wrong, please try again later."


def _issue_message(issue: Any) -> str:
    # Custom validators raise ValueError; show their text without pydantic's prefix.
    ctx = issue.get("ctx") or {}
    if issue.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return str(issue.get("msg", ""))


def get_error_message(err: object) -> str:
    """Map an error to a user-facing message.

    - pydantic ValidationError: every issue message, one per line.
    - StorefrontException: its message.
    - any other Exception with a non-empty message: that message.
    - anything else: UNKNOWN_ERROR_MESSAGE.

    Args:
        err: The caught exception (or any other thrown value).

    Returns:
        Non-empty message string.
    """
    if isinstance(err, ValidationError):
        messages = [_issue_message(issue) for issue in err.errors()]
        joined = "\n".join(m for m in messages if m)
        return joined or UNKNOWN_ERROR_MESSAGE
    if isinstance(err, StorefrontException):
        return err.message or UNKNOWN_ERROR_MESSAGE
    if isinstance(err, Exception):
        message = str(err)
        if message:
            return message
    return UNKNOWN_ERROR_MESSAGE

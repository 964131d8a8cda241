"""
Response envelope pieces shared by every resource
"""
from typing import Any, Sequence
from pydantic import BaseModel


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str


def first_error_message(errors: Sequence[dict[str, Any]]) -> str:
    """
    Human readable message for the first failing field of a validation error.
    Messages raised by our own validators are returned verbatim.
    """
    if not errors:
        return "Invalid request"
    error = errors[0]
    message = str(error.get("msg", "Invalid request"))
    if error.get("type") == "value_error":
        return message.removeprefix("Value error, ")

    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message

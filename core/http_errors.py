"""
HTTP Error Helpers

Uniform error bodies for microservice APIs: {"error": "<Message>"}.
"""

from typing import Any, Dict, Iterable, Sequence, Union

from fastapi.responses import JSONResponse
from pydantic import ValidationError

# Location prefixes FastAPI adds to request validation errors
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def uc_first(message: str) -> str:
    """Capitalize the first letter, leave the rest untouched"""
    if not message:
        return message
    return message[0].upper() + message[1:]


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """
    Flatten pydantic error dicts into one readable message.

    Example:
        [{"loc": ("query", "count"), "msg": "Input should be a valid integer"}]
        -> "count: Input should be a valid integer"
    """
    parts = []
    for error in errors:
        loc: Sequence[Union[str, int]] = error.get("loc") or ()
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        # A bare position (e.g. JSON decode offset) is not a field name
        if len(loc) == 1 and isinstance(loc[0], int):
            loc = ()
        field = ".".join(str(item) for item in loc)
        message = error.get("msg", "invalid value")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts) or "Invalid request"


def validation_message(exc: Union[ValidationError, Any]) -> str:
    """Message for a pydantic ValidationError or FastAPI RequestValidationError"""
    return format_validation_errors(exc.errors())


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error response with the first letter of the message capitalized"""
    return JSONResponse(status_code=status_code, content={"error": uc_first(message)})


__all__ = [
    "uc_first",
    "format_validation_errors",
    "validation_message",
    "error_response",
]

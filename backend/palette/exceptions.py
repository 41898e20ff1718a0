"""
Palette Backend: Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the error scenarios the service
       distinguishes.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers in main.py turn them into JSON error responses.
Who:   Raised by the transform pipeline and ColorService; caught by handlers.

Exception Hierarchy:
    PaletteError (base)
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── MalformedHexError    → 400 on input, 500 when stored data is corrupt
    ├── NotFoundError        → 404 Not Found
    ├── ConflictError        → 409 Conflict (color already stored)
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PaletteError(Exception):
    """
    Base exception for all palette application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PaletteError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Both 'hex' and 'name' are required",
            "details": {"field": "name"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MalformedHexError(PaletteError):
    """
    Raised when a hex color string cannot be parsed into RGB channels.

    Covers strings that are too short, lack the leading '#', or carry
    non-hexadecimal characters in a channel position.

    Attributes:
        hex_value: The full string that failed to parse
        channel:   'red', 'green' or 'blue' for the first channel that failed,
                   None when the failure is structural (missing '#')
        substring: The offending characters for that channel
    """

    def __init__(
        self,
        hex_value: str,
        channel: Optional[str] = None,
        substring: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if channel is None:
            message = f"Malformed hex color '{hex_value}': expected '#' followed by 6 hex digits"
        else:
            message = (
                f"Malformed hex color '{hex_value}': "
                f"{channel} channel '{substring}' is not a two-digit hex value"
            )
        ctx = context or {}
        ctx.update({"hex": hex_value, "channel": channel, "substring": substring})
        super().__init__(message=message, context=ctx)
        self.hex_value = hex_value
        self.channel = channel
        self.substring = substring


class NotFoundError(PaletteError):
    """
    Raised when a lookup matches no stored colors.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "color",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"No {resource} records were found"
        if resource_id:
            message = f"{resource} matching '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(PaletteError):
    """
    Raised when inserting a color whose hex value is already stored.

    HTTP: 409 Conflict
    """

    def __init__(
        self,
        message: str = "color already in database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PaletteError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    The client only ever sees a generic message; context is logged
    server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
Diario de Classe API — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Each exception carries the HTTP status it should be rendered with, so
       services stay free of HTTP objects while routes stay free of error
       bookkeeping.
How:   Services and repositories raise; global handlers registered in
       main.py catch and render `{"status": "error", "message": ...}`.

Exception Hierarchy:
    DiarioError (base)          → 500
    ├── InvalidInputError       → 400 or 422 (carried per instance)
    ├── NotFoundError           → 404
    └── DatabaseError           → 500, generic message to the client

    Status split for InvalidInputError:
        400: malformed identifiers and search terms (the request itself is wrong)
        422: post fields that fail a content rule (well-formed but unacceptable)
"""

from typing import Any, Dict, Optional


class DiarioError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.context = context or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidInputError(DiarioError):
    """
    Raised when client-supplied data fails a constraint.

    When:  Non-numeric or non-positive id, short search term, empty or
           too-short title/content/author.
    HTTP:  400 by default; the service passes 422 for post field rules.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx, status_code=status_code)
        self.field = field


class NotFoundError(DiarioError):
    """
    Raised when a referenced post does not exist.

    Repositories return None/False for missing records; the service converts
    that into this exception so the handler can answer 404.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Post",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(DiarioError):
    """
    Raised when the document store fails (connection lost, duplicate key, ...).

    Security Note:
        The message returned to the client is always generic. Driver details
        live in `context` and are only written to the server log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

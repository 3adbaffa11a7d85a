"""
Domain exceptions.
Every class carries the HTTP status and error code that api/errors.py uses to
build the error envelope, so service code never touches Flask.
"""
from __future__ import annotations


class ChirpyError(Exception):
    status = 500
    error = "INTERNAL_ERROR"

    def __init__(self, message: str | None = None, details: dict | None = None):
        # the class docstring doubles as the default message
        self.message = message or (self.__class__.__doc__ or self.error).strip()
        self.details = details
        super().__init__(self.message)


class InvalidInputError(ChirpyError):
    """Invalid input"""
    status = 422
    error = "VALIDATION_ERROR"


class Unauthenticated(ChirpyError):
    """Invalid or missing credentials"""
    status = 401
    error = "UNAUTHORIZED"


class MissingCredential(Unauthenticated):
    """No bearer token present"""


class InvalidSignature(Unauthenticated):
    """Token signature does not verify"""


class TokenExpired(Unauthenticated):
    """Token expired"""


class MalformedToken(Unauthenticated):
    """Token could not be parsed"""


class PasswordMismatch(Unauthenticated):
    """Incorrect password"""


class Forbidden(ChirpyError):
    """Forbidden"""
    status = 403
    error = "FORBIDDEN"


class NotFound(ChirpyError):
    """Resource not found"""
    status = 404
    error = "NOT_FOUND"


class RefreshTokenNotFound(NotFound):
    """Refresh token not found"""


class Conflict(ChirpyError):
    """Conflict"""
    status = 409
    error = "CONFLICT"


class InternalError(ChirpyError):
    """An unexpected error occurred"""


class HashingError(InternalError):
    """Password hashing failed"""

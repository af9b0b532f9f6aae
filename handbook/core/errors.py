"""Domain errors raised by services; the app maps them to HTTP responses."""
from typing import Literal

TokenKind = Literal["access", "refresh"]


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(ServiceError):
    status_code = 401
    default_message = "Authentication failed"


class InvalidToken(Unauthorized):
    default_message = "Invalid token"


class ExpiredToken(Unauthorized):
    """Token signature is fine but its exp claim has passed."""

    def __init__(self, kind: TokenKind):
        self.kind = kind
        super().__init__(f"{kind.capitalize()} token expired")


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Not allowed"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Already exists"

"""Domain errors raised by services and mapped to HTTP responses by the routers."""


class ServiceError(Exception):
    """Base for expected, user-facing failures. status_code is the HTTP mapping."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailed(ServiceError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationRequired(ServiceError):
    """No valid session token, or wrong credentials."""

    status_code = 401


class PermissionDenied(ServiceError):
    """Authenticated, but the role or ownership check failed."""

    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    """Unique constraint collision (duplicate email)."""

    status_code = 409

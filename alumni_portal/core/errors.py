"""
Typed errors raised by the service layer.

Services raise these synchronously; the API layer maps each one
to an HTTP status code (see ERROR_STATUS_CODES).
"""


class PortalError(Exception):
    """Base class for every workflow failure surfaced to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(PortalError):
    """A referenced id does not exist."""


class DuplicateEmail(PortalError):
    pass


class DuplicateApplication(PortalError):
    pass


class AlreadyRegistered(PortalError):
    pass


class InvalidTransition(PortalError):
    """Status change not allowed by the transition table."""


class PermissionDenied(PortalError):
    pass


ERROR_STATUS_CODES = {
    NotFound: 404,
    DuplicateEmail: 409,
    DuplicateApplication: 409,
    AlreadyRegistered: 409,
    InvalidTransition: 400,
    PermissionDenied: 403,
}


def status_code_for(error: PortalError) -> int:
    for error_type, code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return code
    return 400

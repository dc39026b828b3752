"""
Error types raised by the services and mapped to HTTP statuses by the routes
"""


class PokerError(Exception):
    """Base error, carries the HTTP status the routes answer with"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PokerError):
    """Referenced room or participant does not exist"""
    status_code = 404


class InvalidInputError(PokerError):
    """Payload is well formed but not acceptable in the current state"""
    status_code = 400


class PermissionDeniedError(PokerError):
    """Moderator-only action attempted by another participant"""
    status_code = 403


class ConflictError(PokerError):
    """Record with the same id already exists"""
    status_code = 409


class UpstreamError(PokerError):
    """The issue tracker call failed"""
    status_code = 500

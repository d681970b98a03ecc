# errors.py
"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries a human readable message and the HTTP status it maps to.
The handlers registered in ``app.py`` turn them into JSON responses.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self):
        return {"success": False, "message": self.message, "errors": self.errors}


class ValidationError(ServiceError):
    """Malformed or incomplete input."""
    status_code = 400


class NotFoundError(ServiceError):
    """A referenced document does not exist."""
    status_code = 404


class AuthorizationError(ServiceError):
    """Missing, invalid, expired or revoked credential."""
    status_code = 401


class ForbiddenError(AuthorizationError):
    """Authenticated, but not allowed to do this."""
    status_code = 403


class RateLimitError(ServiceError):
    status_code = 429

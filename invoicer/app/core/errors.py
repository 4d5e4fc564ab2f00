"""Typed failures raised by the persistence and service layers.

Only the request boundary (``invoicer.app.api.errors``) turns these into
HTTP responses.
"""


class InvoicerError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgumentError(InvoicerError):
    status_code = 400
    default_message = "Invalid request"


class AuthError(InvoicerError):
    status_code = 401
    default_message = "Not authenticated"


class InvalidTokenError(AuthError):
    default_message = "Invalid token"


class NotFoundError(InvoicerError):
    status_code = 404
    default_message = "Not found"


class ConflictError(InvoicerError):
    status_code = 409
    default_message = "Resource already exists"

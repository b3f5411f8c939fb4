"""Custom exceptions for the fireworks back-office engines."""

class BackofficeError(Exception):
    """Base exception for all application errors."""
    retryable = False

    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        rv['retry'] = self.retryable
        return rv

class InvalidInputError(BackofficeError):
    """Raised for malformed pricing or packaging parameters."""
    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)

class BusinessLogicError(BackofficeError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)

class NotFoundError(BackofficeError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)

class RenderFailureError(BackofficeError):
    """Raised when a generated document buffer fails the output checks.

    Rendering is deterministic and side-effect free, so callers may simply
    invoke the engine again.
    """
    retryable = True

    def __init__(self, message="PDF generation failed", payload=None):
        super().__init__(message, 500, payload)

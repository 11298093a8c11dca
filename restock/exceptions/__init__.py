"""Custom exceptions for the RESTOCK order service."""


class RestockError(Exception):
    """Base exception for all application errors."""
    kind = 'Internal'

    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['kind'] = self.kind
        rv['status'] = 'error'
        return rv


class NotFoundError(RestockError):
    """Raised when a referenced table, order, item or user does not exist."""
    kind = 'NotFound'

    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


class InvalidReferenceError(RestockError):
    """Raised when an externally resolved entity (user, catalog product) is rejected or absent."""
    kind = 'InvalidReference'

    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)


class ConflictError(RestockError):
    """Raised on a duplicate unique key (e.g. table name)."""
    kind = 'Conflict'

    def __init__(self, message, payload=None):
        super().__init__(message, 409, payload)


class UpstreamError(RestockError):
    """Raised when a downstream service call fails after the referenced entity was valid."""
    kind = 'UpstreamFailure'

    def __init__(self, message, payload=None):
        super().__init__(message, 502, payload)


class ValidationError(RestockError):
    """Raised when a request payload does not match its schema."""
    kind = 'Validation'

    def __init__(self, message="Invalid request payload", errors=None):
        super().__init__(message, 422, {'errors': errors or []})

"""Error taxonomy shared by the store and the HTTP layer."""


class ConfigurationError(Exception):
    """Raised when required configuration is missing at startup."""


class IssueForgeError(Exception):
    """Base class for errors rendered as JSON error responses."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.error, "message": self.message}


class ValidationError(IssueForgeError):
    status_code = 400
    error = "Validation failed"


class InvalidIdentifier(IssueForgeError):
    status_code = 400
    error = "Invalid ID format"


class NotFound(IssueForgeError):
    status_code = 404
    error = "Issue not found"


class StoreError(IssueForgeError):
    """Underlying database failure. The message carries the driver error."""

    status_code = 500
    error = "Store error"


class StoreUnavailable(StoreError):
    error = "Store unavailable"

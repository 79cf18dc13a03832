"""Custom exception hierarchy for ccb-ops."""


class CCBOpsError(Exception):
    """Base exception for all ccb-ops errors."""


class ValidationError(CCBOpsError):
    """Raised when input violates the operation schema.

    Carries the first violated field and a human-readable message.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class StoreError(CCBOpsError):
    """Raised when the record store fails."""


class RecordNotFoundError(StoreError):
    """Raised when a referenced row does not exist."""


class RecordDecodeError(StoreError):
    """Raised when a stored row holds a value outside the known vocabulary."""


class SavedRecordDecodeError(RecordDecodeError):
    """Raised when a write succeeded but the returned row cannot be decoded.

    The row exists in the store, so resubmitting would duplicate it.
    """

    def __init__(self, message: str, row_id: str | None = None) -> None:
        super().__init__(message)
        self.row_id = row_id


class AuthError(CCBOpsError):
    """Raised when the identity provider rejects a request."""

    INVALID_CREDENTIALS = "invalid_credentials"
    ALREADY_REGISTERED = "already_registered"
    UNKNOWN = "unknown"

    def __init__(self, message: str, kind: str = UNKNOWN) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


class ConfigurationError(CCBOpsError):
    """Raised when configuration is invalid or missing."""

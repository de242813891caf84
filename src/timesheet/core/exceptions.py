class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced worker or record does not exist."""


class UnknownShiftError(DomainError):
    """Raised when a shift name is not part of the shift catalog."""

    def __init__(self, shift_name: str):
        super().__init__(f"Unknown shift: {shift_name!r}")
        self.shift_name = shift_name


class SyncFormatError(DomainError):
    """Raised when an imported sync code or backup file has the wrong shape."""

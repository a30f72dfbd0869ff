class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ForbiddenError(DomainError):
    """Raised when an action is not allowed on the target resource."""


class BackupNotFoundError(DomainError):
    """Raised when a backup archive does not exist."""


class RemoteSyncError(DomainError):
    """Raised when the remote data file cannot be read or decoded."""

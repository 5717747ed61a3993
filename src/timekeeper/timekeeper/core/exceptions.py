class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SyncError(DomainError):
    """Raised when the remote document store cannot be read or written."""


class BackupImportError(DomainError):
    """Raised when a backup file cannot be parsed or lacks required keys."""


class ExportError(DomainError):
    """Raised when a report workbook cannot be produced."""

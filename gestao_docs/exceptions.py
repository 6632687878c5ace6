"""Custom exception hierarchy for gestao-docs."""


class GestaoError(Exception):
    """Base exception for all gestao-docs errors."""


class EntityNotFoundError(GestaoError):
    """Raised when a referenced entity does not exist."""


class DuplicateEntityError(GestaoError):
    """Raised when an entity with the same key already exists."""


class InvalidEntityStateError(GestaoError):
    """Raised when an entity is missing required fields or is otherwise invalid."""


class ConfigurationError(GestaoError):
    """Raised when configuration is invalid or missing."""


class StoreError(GestaoError):
    """Raised when a storage backend cannot read or write a collection."""


class SpreadsheetImportError(GestaoError):
    """Raised when a spreadsheet cannot be read or has an unexpected layout."""


class BackupValidationError(GestaoError):
    """Raised when a backup file has an invalid structure."""

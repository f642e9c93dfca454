"""
Catalog error taxonomy.

Every failure the catalog reports to a client is one of these types. Each
carries the HTTP status it maps to, so the API layer can translate them
without inspecting messages.
"""

from typing import Optional


class CatalogError(Exception):
    """
    Base exception for all catalog errors.

    Example:
        >>> try:
        ...     service.register_plugin(...)
        ... except CatalogError as e:
        ...     logger.error(f"Registration failed: {e.message}")
    """

    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(CatalogError):
    """
    Raised when a required field is missing, blank or malformed.

    Client-correctable. Raised before any storage mutation.
    """

    status_code = 400


class PersistenceError(CatalogError):
    """
    Raised when the storage engine rejects or fails an operation.

    Also raised when the store could not be opened at startup and a
    request tries to use it. Never retried.
    """

    pass


class ResolutionInconsistency(CatalogError):
    """
    Raised when a tag lookup finds no row right after its insert.

    The insert either created the row or was a no-op because the row
    already existed, so an empty lookup means the store is not
    returning what it acknowledged.
    """

    pass

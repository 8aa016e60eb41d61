"""Catalog-level errors.

Missing records and records owned by somebody else raise the same
``NotFoundOrDenied`` with the same message, so callers cannot probe for
other users' ids.
"""

CLIP_NOT_FOUND = "Clip not found or access denied"
SESSION_NOT_FOUND = "Session not found or access denied"


class CatalogError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundOrDenied(CatalogError):
    """Record is absent or not owned by the caller."""


class ValidationFailure(CatalogError):
    """Upload rejected (size or content type)."""


class StorageUnavailable(CatalogError):
    """Object storage credentials are not configured."""

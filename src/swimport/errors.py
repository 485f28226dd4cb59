from __future__ import annotations


class SwImportError(Exception):
    """Base class for everything the importer raises on purpose."""


class ConfigError(SwImportError):
    """Mapping, reference data or API settings could not be loaded."""


class TransformError(SwImportError):
    """A source row could not be turned into a usable customer record."""


class RemoteError(SwImportError):
    """
    The Shopware API call failed (transport error, HTTP error status or an
    unparseable response body).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteNotFound(RemoteError):
    """HTTP 404 from the API. Expected during lookups, never logged as an error."""

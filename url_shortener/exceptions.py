"""
Error taxonomy for the URL store.

Classes:
    StorageError:
        Base class for every error raised by a storage backend.

    AliasExists:
        The alias is already taken. Retryable by regenerating the alias.

    NotFound:
        No record has the requested alias. Terminal for the request.

    StorageUnavailable:
        The backing store could not be reached or the statement failed.
        Terminal; callers log it with context.

Example:
    >>> from url_shortener.exceptions import AliasExists
    >>> raise AliasExists("ab12cd", operation="storage.sqlite.save_url")
    Traceback (most recent call last):
        ...
    url_shortener.exceptions.AliasExists: storage.sqlite.save_url: alias 'ab12cd' already exists
"""

from typing import Optional


class StorageError(Exception):
    """Generic base class for storage-related exceptions."""


class AliasExists(StorageError):
    """Raised when inserting a record whose alias is already stored."""

    def __init__(self, alias: str, operation: Optional[str] = None):
        self.alias = alias
        self.operation = operation
        msg = f"alias {alias!r} already exists"
        super().__init__(f"{operation}: {msg}" if operation else msg)


class NotFound(StorageError):
    """Raised when no record matches the alias."""

    def __init__(self, alias: str, operation: Optional[str] = None):
        self.alias = alias
        self.operation = operation
        msg = f"alias {alias!r} not found"
        super().__init__(f"{operation}: {msg}" if operation else msg)


class StorageUnavailable(StorageError):
    """Raised on connection or I/O failure of the backing store.

    e.g. database file not writable, server down, statement timeout.
    """

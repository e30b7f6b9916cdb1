"""
Abstract Storage Interface

DESIGN DECISION: The ledger text comes from a storage collaborator the caller
supplies. This allows us to:
1. Read a local file during development
2. Fetch from an authenticated ledger server in production
3. Use in-memory storage for testing
4. Keep the parser, repository and reports free of I/O

The interface is intentionally tiny - one fetch and one metadata field.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class LedgerStorageInterface(ABC):
    """
    Abstract interface for fetching ledger text.

    Any source (file, HTTP server, object store) must implement these.
    """

    @abstractmethod
    async def fetch_ledger_content(self) -> str:
        """
        Fetch the full ledger text.

        Returns:
            The raw ledger text

        Raises:
            StorageError: If the text cannot be fetched
        """
        pass

    @property
    @abstractmethod
    def last_modified(self) -> Optional[datetime]:
        """
        Last-modified marker from the most recent fetch.

        None if nothing has been fetched or the source doesn't say.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Ledger not found in storage."""
    pass


class AuthenticationError(StorageError):
    """Storage rejected or lacked credentials."""
    pass


class StorageConnectionError(StorageError):
    """Could not reach the storage backend."""
    pass

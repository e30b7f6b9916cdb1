"""
Storage Services Package

Provides the abstract ledger storage interface and the shipped adapters.
The repository only ever talks to LedgerStorageInterface.
"""

from ledgerlens.services.storage.interface import (
    AuthenticationError,
    LedgerStorageInterface,
    NotFoundError,
    StorageConnectionError,
    StorageError,
)
from ledgerlens.services.storage.local_file import LocalFileStorage
from ledgerlens.services.storage.memory import InMemoryLedgerStorage
from ledgerlens.services.storage.server import ServerLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "AuthenticationError",
    "NotFoundError",
    "StorageConnectionError",
    "StorageError",
    # Implementations
    "InMemoryLedgerStorage",
    "LocalFileStorage",
    "ServerLedgerStorage",
]

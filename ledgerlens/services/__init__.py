"""Services package."""

from ledgerlens.services.storage import (
    AuthenticationError,
    InMemoryLedgerStorage,
    LedgerStorageInterface,
    LocalFileStorage,
    NotFoundError,
    ServerLedgerStorage,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    "AuthenticationError",
    "InMemoryLedgerStorage",
    "LedgerStorageInterface",
    "LocalFileStorage",
    "NotFoundError",
    "ServerLedgerStorage",
    "StorageConnectionError",
    "StorageError",
]

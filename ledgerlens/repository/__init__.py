"""Ledger repository package."""

from ledgerlens.repository.provider import RepositoryProvider
from ledgerlens.repository.repository import LedgerRepository

__all__ = ["LedgerRepository", "RepositoryProvider"]

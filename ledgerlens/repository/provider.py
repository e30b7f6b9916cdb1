"""
Repository Provider

The shared-instance accessor for callers that want one repository per
process. Instead of a hidden module-level singleton, the application
creates a provider, owns it, and hands it to whoever needs the shared
repository.
"""

import asyncio
from typing import Optional

from ledgerlens.audit import AuditLogger
from ledgerlens.repository.repository import LedgerRepository
from ledgerlens.services.storage import LedgerStorageInterface


class RepositoryProvider:
    """
    Holds at most one LedgerRepository.

    Concurrent get() calls never build two repositories: creation and the
    initial fetch run under a lock, and later callers receive the instance
    the first one built.
    """

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger or AuditLogger()
        self._repository: Optional[LedgerRepository] = None
        self._lock = asyncio.Lock()

    @property
    def current(self) -> Optional[LedgerRepository]:
        return self._repository

    async def get(self, storage: LedgerStorageInterface) -> LedgerRepository:
        """
        The shared repository, created and pre-fetched on first call.

        The storage argument is only used on the first call; later calls
        return the existing repository whatever storage they pass.
        """
        if self._repository is not None:
            return self._repository

        async with self._lock:
            if self._repository is None:
                repository = LedgerRepository(storage, audit_logger=self._audit_logger)
                # Pre-fetch so a failed fetch leaves no half-built instance
                await repository.get_snapshot()
                self._repository = repository
                self._audit_logger.log_repository_created(type(storage).__name__)
            return self._repository

    def clear(self) -> None:
        """Discard the shared repository. The next get() builds a new one."""
        if self._repository is not None:
            self._repository = None
            self._audit_logger.log_repository_cleared()

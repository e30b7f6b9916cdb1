"""
In-Memory Ledger Storage

Serves ledger text held in memory. Used by tests and by callers that
already have the text in hand.
"""

from datetime import datetime, timezone
from typing import Optional

from ledgerlens.services.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Holds one ledger text; update() swaps it."""

    def __init__(self, content: str = "", last_modified: Optional[datetime] = None):
        self._content = content
        self._pending_modified = last_modified
        self._last_modified: Optional[datetime] = None
        self.fetch_count = 0

    def update(self, content: str, last_modified: Optional[datetime] = None) -> None:
        """Replace the stored text, as if the file had been edited."""
        self._content = content
        self._pending_modified = last_modified or datetime.now(timezone.utc)

    async def fetch_ledger_content(self) -> str:
        self.fetch_count += 1
        self._last_modified = self._pending_modified
        return self._content

    @property
    def last_modified(self) -> Optional[datetime]:
        return self._last_modified

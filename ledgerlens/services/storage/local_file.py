"""
Local File Storage

Reads a .ledger file from disk. The read runs in a worker thread so the
event loop isn't blocked by a large file.
"""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from ledgerlens.config import get_settings
from ledgerlens.services.storage.interface import (
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)


class LocalFileStorage(LedgerStorageInterface):
    """Ledger text from a file; last_modified is the file's mtime."""

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        if file_path is None:
            file_path = get_settings().storage.file_path
        if not file_path:
            raise ValueError("No ledger file path given and LEDGER_FILE_PATH is not set")
        self._path = Path(file_path)
        self._last_modified: Optional[datetime] = None

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> tuple[str, datetime]:
        stat = self._path.stat()
        content = self._path.read_text(encoding="utf-8")
        return content, datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

    async def fetch_ledger_content(self) -> str:
        try:
            content, modified = await asyncio.to_thread(self._read)
        except FileNotFoundError:
            raise NotFoundError(f"Ledger file not found: {self._path}")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read ledger file {self._path}: {e}")

        self._last_modified = modified
        return content

    @property
    def last_modified(self) -> Optional[datetime]:
        return self._last_modified

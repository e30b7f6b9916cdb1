"""
Ledger Server Storage

Fetches one year's ledger from the ledger server:

    POST {base_url}/ledger/{year}
    Authorization: Bearer <token>

DESIGN DECISION: Only transport failures are retried.
A 403 or 404 will not get better on the next attempt, so those map
straight to exceptions. Connection resets and timeouts are retried with
exponential backoff before surfacing as StorageConnectionError.
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Awaitable, Callable, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ledgerlens.config import get_settings
from ledgerlens.services.storage.interface import (
    AuthenticationError,
    LedgerStorageInterface,
    NotFoundError,
    StorageConnectionError,
    StorageError,
)


TokenGetter = Callable[[], Awaitable[Optional[str]]]


def _parse_last_modified(header: Optional[str]) -> Optional[datetime]:
    if not header:
        return None
    try:
        return parsedate_to_datetime(header)
    except (TypeError, ValueError):
        return None


class ServerLedgerStorage(LedgerStorageInterface):
    """
    Authenticated HTTP source for ledger text.

    Every fetch asks the token getter for a fresh token, so expired
    sessions are picked up without rebuilding the storage.
    """

    def __init__(
        self,
        get_auth_token: TokenGetter,
        base_url: Optional[str] = None,
        year: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        retry_attempts: Optional[int] = None,
        retry_wait_max: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings().storage
        self._get_auth_token = get_auth_token
        self._base_url = (base_url or settings.server_url).rstrip("/")
        self._year = year or settings.year
        self._timeout = timeout_seconds or settings.request_timeout_seconds
        self._retry_attempts = retry_attempts or settings.retry_attempts
        self._retry_wait_max = retry_wait_max
        self._client = client
        self._last_modified: Optional[datetime] = None

    @property
    def year(self) -> int:
        return self._year

    def set_year(self, year: int) -> None:
        """Switch to another year's ledger. Resets last_modified."""
        if year != self._year:
            self._year = year
            self._last_modified = None

    @property
    def last_modified(self) -> Optional[datetime]:
        return self._last_modified

    async def _post(self, url: str, headers: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(url, headers=headers)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, headers=headers)

    async def _request(self, url: str, headers: dict) -> httpx.Response:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._retry_attempts),
                wait=wait_exponential(multiplier=1, min=0, max=self._retry_wait_max),
                retry=retry_if_exception_type(httpx.TransportError),
            ):
                with attempt:
                    return await self._post(url, headers)
        except RetryError as e:
            cause = e.last_attempt.exception()
            raise StorageConnectionError(f"Failed to reach ledger server at {url}: {cause}") from cause

    async def fetch_ledger_content(self) -> str:
        token = await self._get_auth_token()
        if not token:
            raise AuthenticationError("No authentication token available")

        url = f"{self._base_url}/ledger/{self._year}"
        response = await self._request(
            url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )

        if response.status_code == 403:
            raise AuthenticationError("Authentication failed - invalid or expired token")
        if response.status_code == 404:
            raise NotFoundError(f"Ledger file not found for year {self._year}")
        if not response.is_success:
            raise StorageError(f"Server error: {response.status_code} {response.reason_phrase}")

        self._last_modified = (
            _parse_last_modified(response.headers.get("last-modified"))
            or datetime.now(timezone.utc)
        )
        return response.text

"""
In-memory bearer token cache.

Tokens are kept in process memory only, never persisted. Expiry is checked
lazily on every read: an expired entry is evicted and reported as missing,
there is no background sweep.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from carrier_rates.core.utils import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedToken:
    """Bearer credential with an absolute expiry."""
    access_token: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


class InMemoryTokenCache:
    """
    Key-value store of cached tokens, one entry per credential scope.

    Shared between every auth provider that is handed the same instance;
    map access is serialized with an asyncio.Lock.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._tokens: Dict[str, CachedToken] = {}
        self._lock: Optional[asyncio.Lock] = None

    def _get_lock(self) -> asyncio.Lock:
        # Created on first use so it belongs to the loop that runs the requests
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def get(self, key: str) -> Optional[CachedToken]:
        """Return the token for key, or None if missing or expired."""
        async with self._get_lock():
            token = self._tokens.get(key)
            if token is None:
                return None

            if not token.is_valid(self._clock()):
                del self._tokens[key]
                logger.debug(f"Evicted expired token for {key}")
                return None

            return token

    async def set(self, key: str, token: CachedToken) -> None:
        """Store token under key, replacing any existing entry."""
        async with self._get_lock():
            self._tokens[key] = token

    def clear(self) -> None:
        self._tokens.clear()

    def size(self) -> int:
        return len(self._tokens)

import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, NotRequired, Optional, TypedDict, TypeVar

from enka_assets.logger import logger

T = TypeVar("T")


class CacheStats(TypedDict):
    total: int
    valid: int
    expired: int


class CacheInfo(TypedDict):
    exists: bool
    valid: NotRequired[bool]
    age: NotRequired[float]
    ttl: NotRequired[float]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    created_at: float
    ttl: float

    def is_valid(self, now: float) -> bool:
        return now - self.created_at < self.ttl

    def age(self, now: float) -> float:
        return now - self.created_at


def generate_cache_key(prefix: str, uid: str | int) -> str:
    return f"{prefix}_{uid}"


class CacheManager:
    """
    In-memory key/value store where every entry carries its own TTL.

    Expiry is lazy: a stale entry is dropped the next time it is read, or by an
    explicit `cleanup()`. There is no background sweep.
    When `enabled` is False the cache is transparent: `get` always misses and
    `set` never writes.
    """

    def __init__(self, default_ttl: float, enabled: bool = True, clock: Callable[[], float] = time.time):
        self.default_ttl = default_ttl
        self.enabled = enabled
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None

        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss for %s", key)
            return None

        if entry.is_valid(self._clock()):
            logger.debug("Cache hit for %s", key)
            return entry.value

        logger.debug("Cache entry %s expired, removing it", key)
        del self._entries[key]
        return None

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        if not self.enabled:
            return
        self._entries[key] = CacheEntry(
            value=value,
            created_at=self._clock(),
            ttl=self.default_ttl if ttl is None else ttl,
        )

    def has_valid(self, key: str) -> bool:
        if not self.enabled:
            return False
        entry = self._entries.get(key)
        if entry is None:
            return False
        return entry.is_valid(self._clock())

    def invalidate(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def get_stats(self) -> CacheStats:
        now = self._clock()
        total = len(self._entries)
        valid = sum(1 for entry in self._entries.values() if entry.is_valid(now))
        return CacheStats(total=total, valid=valid, expired=total - valid)

    def cleanup(self) -> int:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if not entry.is_valid(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Removed %d expired cache entries", len(expired))
        return len(expired)

    def get_cache_info(self, key: str) -> CacheInfo:
        entry = self._entries.get(key)
        if entry is None:
            return CacheInfo(exists=False)

        now = self._clock()
        return CacheInfo(
            exists=True,
            valid=entry.is_valid(now),
            age=entry.age(now),
            ttl=entry.ttl,
        )

    def __len__(self) -> int:
        return len(self._entries)

import asyncio
import time
from enum import Enum
from typing import Any, Callable, TypedDict

import aiohttp

from enka_assets.enka_tracker.http_session import SessionProvider
from enka_assets.lib.cache import CacheManager
from enka_assets.lib.config import DEFAULT_USER_AGENT
from enka_assets.lib.errors import EnkaDataFetchError
from enka_assets.logger import logger

REFERENCE_DATA_TTL = 24 * 60 * 60


class DatasetKind(str, Enum):
    CHARACTERS = "characters"
    PROFILE_PICTURES = "pfps"
    NAME_CARDS = "namecards"


DATA_URLS: dict[DatasetKind, str] = {
    DatasetKind.CHARACTERS:
        "https://raw.githubusercontent.com/EnkaNetwork/API-docs/master/store/characters.json",
    DatasetKind.PROFILE_PICTURES:
        "https://raw.githubusercontent.com/EnkaNetwork/API-docs/master/store/gi/pfps.json",
    DatasetKind.NAME_CARDS:
        "https://raw.githubusercontent.com/EnkaNetwork/API-docs/master/store/gi/namecards.json",
}

CharacterData = dict[str, dict[str, Any]]
PfpData = dict[str, dict[str, Any]]
NameCardData = dict[str, dict[str, Any]]


class DatasetCacheInfo(TypedDict):
    cached: bool
    age: float
    expired: bool


class ReferenceDataStore:
    """
    Lazily downloads the static Enka reference datasets (characters, profile
    pictures, name cards) and keeps one snapshot of each for 24 hours.

    Snapshots are only ever replaced as a whole. Once a snapshot is expired it
    is dropped before the refetch, so a failed refetch leaves that dataset
    absent instead of serving stale data.
    """

    def __init__(self, session_provider: SessionProvider | None = None,
                 user_agent: str = DEFAULT_USER_AGENT,
                 clock: Callable[[], float] = time.time,
                 ttl: float = REFERENCE_DATA_TTL):
        self.session_provider = session_provider or SessionProvider()
        self.user_agent = user_agent
        self._clock = clock
        self._snapshots = CacheManager(default_ttl=ttl, enabled=True, clock=clock)
        self._inflight: dict[DatasetKind, asyncio.Future] = {}

    async def _fetch_json(self, kind: DatasetKind) -> dict[str, Any]:
        url = DATA_URLS[kind]
        session = self.session_provider.get_session()
        try:
            async with session.get(url, headers={"User-Agent": self.user_agent}) as resp:
                if not 200 <= resp.status < 300:
                    raise EnkaDataFetchError(
                        f"Failed to fetch reference data {kind.value}: {resp.status} {resp.reason or ''}".rstrip(),
                        kind,
                        resp.status,
                    )
                data = await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            raise EnkaDataFetchError(f"Network error while fetching reference data {kind.value}: {e}", kind) from e
        except asyncio.TimeoutError as e:
            raise EnkaDataFetchError(f"Timed out while fetching reference data {kind.value}", kind) from e
        except ValueError as e:
            raise EnkaDataFetchError(f"Malformed reference data {kind.value}: {e}", kind) from e

        if not isinstance(data, dict):
            raise EnkaDataFetchError(f"Malformed reference data {kind.value}: expected a JSON object", kind)
        return data

    async def get_dataset(self, kind: DatasetKind) -> dict[str, Any]:
        data = self._snapshots.get(kind.value)
        if data is not None:
            return data

        # concurrent callers share one in-flight refresh and its outcome
        task = self._inflight.get(kind)
        if task is None:
            task = asyncio.ensure_future(self._refresh(kind))
            self._inflight[kind] = task
            task.add_done_callback(lambda done: self._release(kind, done))
        return await asyncio.shield(task)

    async def _refresh(self, kind: DatasetKind) -> dict[str, Any]:
        logger.debug("Fetching reference data %s", kind.value)
        data = await self._fetch_json(kind)
        self._snapshots.set(kind.value, data)
        logger.info("Reference data %s loaded (%d entries)", kind.value, len(data))
        return data

    def _release(self, kind: DatasetKind, task: asyncio.Future) -> None:
        if self._inflight.get(kind) is task:
            del self._inflight[kind]
        # awaiters re-raise the error themselves, this only marks it retrieved
        if not task.cancelled():
            task.exception()

    async def get_characters(self) -> CharacterData:
        return await self.get_dataset(DatasetKind.CHARACTERS)

    async def get_profile_pictures(self) -> PfpData:
        return await self.get_dataset(DatasetKind.PROFILE_PICTURES)

    async def get_name_cards(self) -> NameCardData:
        return await self.get_dataset(DatasetKind.NAME_CARDS)

    async def preload_all(self) -> dict[DatasetKind, dict[str, Any]]:
        characters, pfps, namecards = await asyncio.gather(
            self.get_characters(),
            self.get_profile_pictures(),
            self.get_name_cards(),
        )
        return {
            DatasetKind.CHARACTERS: characters,
            DatasetKind.PROFILE_PICTURES: pfps,
            DatasetKind.NAME_CARDS: namecards,
        }

    def clear_cache(self) -> None:
        self._snapshots.clear()

    def cache_info(self) -> dict[str, DatasetCacheInfo]:
        ret = {}
        for kind in DatasetKind:
            info = self._snapshots.get_cache_info(kind.value)
            ret[kind.value] = DatasetCacheInfo(
                cached=info["exists"],
                age=info.get("age", 0),
                expired=not info.get("valid", False),
            )
        return ret

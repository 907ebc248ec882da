import copy
import time
from typing import Any, Callable, Optional

import aiohttp

from enka_assets.assets import AssetMapper
from enka_assets.assets.data_fetcher import DatasetKind, ReferenceDataStore
from enka_assets.assets.structures import DataStats, ResolvedPlayerAssets
from enka_assets.assets.url_builder import AssetFormat, AssetSize, UrlBuilder
from enka_assets.enka_tracker import EnkaApiClient
from enka_assets.enka_tracker.http_session import SessionProvider
from enka_assets.lib.cache import CacheInfo, CacheManager, CacheStats, generate_cache_key
from enka_assets.lib.config import AssetConfig, DEFAULT_CONFIG
from enka_assets.lib.errors import EnkaAssetError, EnkaUnexpectedError
from enka_assets.logger import logger

PLAYER_CACHE_PREFIX = "player"


class EnkaAssetWrapper:
    """
    Entry point of the library: fetches a player's Enka profile, resolves it
    into URL-annotated assets and caches the result per uid.

    Usage::

        async with EnkaAssetWrapper(cache_duration=600) as enka:
            assets = await enka.get_player_assets(618285856)

    The wrapper owns its HTTP session, its player cache and its reference
    data snapshots. Nothing is shared between two instances.
    """

    def __init__(self, config: Optional[AssetConfig] = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 clock: Callable[[], float] = time.time,
                 **overrides: Any):
        self.config = (config or DEFAULT_CONFIG).merge(**overrides)
        self.session_provider = SessionProvider(session)
        self.api_client = EnkaApiClient(self.config, self.session_provider)
        self.cache = CacheManager(
            default_ttl=self.config.cache_duration,
            enabled=self.config.enable_cache,
            clock=clock,
        )
        self.url_builder = UrlBuilder(self.config.base_url)
        self.data_store = ReferenceDataStore(self.session_provider, self.config.user_agent, clock=clock)
        self.asset_mapper = AssetMapper(self.data_store, self.url_builder)

    async def close(self) -> None:
        await self.session_provider.close_session()
        logger.debug("EnkaAssetWrapper closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type: Any, exc_value: Any, tb: Any) -> None:
        await self.close()

    @staticmethod
    def player_cache_key(uid: str | int) -> str:
        return generate_cache_key(PLAYER_CACHE_PREFIX, uid)

    async def _resolve(self, uid: str | int) -> ResolvedPlayerAssets:
        try:
            api_response = await self.api_client.get_player_data(uid)
            return await self.asset_mapper.map_player_assets(api_response)
        except EnkaAssetError:
            raise
        except Exception as e:
            logger.error("Unexpected error while resolving uid %s: %s", uid, e, exc_info=True)
            raise EnkaUnexpectedError(f"Failed to get player assets: {e}") from e

    async def get_player_assets(self, uid: str | int) -> ResolvedPlayerAssets:
        key = self.player_cache_key(uid)
        cached = self.cache.get(key)
        if cached is not None:
            return copy.deepcopy(cached)

        assets = await self._resolve(uid)
        # cached records are never handed out directly
        self.cache.set(key, copy.deepcopy(assets))
        return assets

    async def get_player_assets_uncached(self, uid: str | int) -> ResolvedPlayerAssets:
        return await self._resolve(uid)

    def build_asset_url(self, icon_name: str,
                        format: AssetFormat | str = AssetFormat.PNG,
                        size: AssetSize | str = AssetSize.ORIGINAL) -> str:
        return self.url_builder.build_url(icon_name, format=format, size=size)

    def is_player_cached(self, uid: str | int) -> bool:
        return self.cache.has_valid(self.player_cache_key(uid))

    def get_player_cache_info(self, uid: str | int) -> CacheInfo:
        return self.cache.get_cache_info(self.player_cache_key(uid))

    def clear_player_cache(self, uid: str | int) -> bool:
        return self.cache.invalidate(self.player_cache_key(uid))

    def clear_all_cache(self) -> None:
        self.cache.clear()

    def get_cache_stats(self) -> CacheStats:
        return self.cache.get_stats()

    def cleanup_cache(self) -> int:
        return self.cache.cleanup()

    async def get_data_stats(self) -> DataStats:
        return await self.asset_mapper.get_data_stats()

    async def has_character(self, avatar_id: int | str) -> bool:
        return await self.asset_mapper.has_character(avatar_id)

    async def has_profile_picture(self, pfp_id: int | str) -> bool:
        return await self.asset_mapper.has_profile_picture(pfp_id)

    async def has_name_card(self, name_card_id: int | str) -> bool:
        return await self.asset_mapper.has_name_card(name_card_id)

    async def preload_reference_data(self) -> dict[DatasetKind, dict[str, Any]]:
        return await self.data_store.preload_all()

    def clear_reference_cache(self) -> None:
        self.asset_mapper.clear_data_cache()

    def get_reference_cache_info(self):
        return self.asset_mapper.get_data_cache_info()

    def get_config(self) -> AssetConfig:
        return self.config

    def update_config(self, **overrides: Any) -> AssetConfig:
        """
        Merge `overrides` into the current config and push the result to every
        component. Entries already cached keep the TTL they were stored with.
        """
        self.config = self.config.merge(**overrides)
        self.api_client.config = self.config
        self.cache.default_ttl = self.config.cache_duration
        self.cache.enabled = self.config.enable_cache
        self.url_builder.base_url = self.config.base_url
        self.data_store.user_agent = self.config.user_agent
        logger.debug("Config updated: %s", self.config)
        return self.config

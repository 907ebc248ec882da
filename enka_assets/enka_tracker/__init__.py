import asyncio
from typing import Any

import aiohttp

from enka_assets.enka_tracker.http_session import SessionProvider
from enka_assets.enka_tracker.structures import EnkaApiResponse, PlayerInfo, ShowAvatarInfo, ProfilePictureRef
from enka_assets.lib.config import AssetConfig, DEFAULT_CONFIG
from enka_assets.lib.errors import (
    EnkaApiError,
    EnkaInvalidResponseError,
    EnkaRateLimitError,
    EnkaTransportError,
)
from enka_assets.logger import logger


class EnkaApiClient:
    """
    Fetches raw player profiles from the Enka Network API.
    """

    def __init__(self, config: AssetConfig = DEFAULT_CONFIG, session_provider: SessionProvider | None = None):
        self.config = config
        self.session_provider = session_provider or SessionProvider()

    def build_player_url(self, uid: str | int, info: bool = True) -> str:
        return f"{self.config.api_url}/uid/{uid}{'?info' if info else ''}"

    async def fetch_player_data(self, uid: str | int, info: bool = True) -> EnkaApiResponse:
        url = self.build_player_url(uid, info)
        headers = {"User-Agent": self.config.user_agent}
        session = self.session_provider.get_session()

        logger.debug("Fetching player %s from %s", uid, url)
        try:
            async with session.get(url, headers=headers) as resp:
                if not 200 <= resp.status < 300:
                    raise EnkaApiError(
                        f"API request failed: {resp.status} {resp.reason or ''}".rstrip(),
                        resp.status,
                    )
                try:
                    data: Any = await resp.json(content_type=None)
                except ValueError as e:
                    raise EnkaApiError(f"Malformed API response for uid {uid}: {e}") from e
        except aiohttp.ClientError as e:
            raise EnkaTransportError(f"Network error: {e}") from e
        except asyncio.TimeoutError as e:
            raise EnkaTransportError(f"Network error: request for uid {uid} timed out") from e

        if not isinstance(data, dict) or not data.get("playerInfo"):
            logger.warning("Invalid API response for uid %s: missing playerInfo", uid)
            raise EnkaInvalidResponseError("Invalid API response: missing playerInfo")

        return data

    async def get_player_data(self, uid: str | int) -> EnkaApiResponse:
        try:
            return await self.fetch_player_data(uid, info=True)
        except EnkaApiError as e:
            if e.status_code == 429 and not isinstance(e, EnkaRateLimitError):
                logger.warning("Rate limited by Enka API while fetching uid %s", uid)
                raise EnkaRateLimitError() from e
            raise

    def get_config(self) -> AssetConfig:
        return self.config

    def update_config(self, **overrides: Any) -> None:
        self.config = self.config.merge(**overrides)


__all__ = [
    "EnkaApiClient",
    "EnkaApiResponse",
    "PlayerInfo",
    "ShowAvatarInfo",
    "ProfilePictureRef",
    "SessionProvider",
]

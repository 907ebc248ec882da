import asyncio
import copy
import datetime
from typing import Any, Optional

from enka_assets.assets.data_fetcher import DatasetKind, ReferenceDataStore
from enka_assets.assets.helpers import get_quality_numeric, transform_icon_name
from enka_assets.assets.structures import (
    DataStats,
    ResolvedNameCard,
    ResolvedPlayerAssets,
    ResolvedPlayerInfo,
    ResolvedProfilePicture,
    ResolvedShowAvatar,
)
from enka_assets.assets.url_builder import UrlBuilder
from enka_assets.enka_tracker.structures import EnkaApiResponse, PlayerInfo, ShowAvatarInfo
from enka_assets.lib.errors import EnkaMappingError
from enka_assets.logger import logger

# profile picture IconPath values are absolute paths on this host, not on base_url
PROFILE_PICTURE_HOST = "https://enka.network"

# (wire key, output key) pairs copied verbatim from playerInfo
PLAYER_INFO_FIELDS = (
    ("nickname", "nickname"),
    ("level", "level"),
    ("signature", "signature"),
    ("worldLevel", "world_level"),
    ("finishAchievementNum", "finish_achievement_num"),
    ("towerFloorIndex", "tower_floor_index"),
    ("towerLevelIndex", "tower_level_index"),
    ("theaterActIndex", "theater_act_index"),
    ("theaterModeIndex", "theater_mode_index"),
    ("theaterStarIndex", "theater_star_index"),
    ("isShowAvatarTalent", "is_show_avatar_talent"),
    ("fetterCount", "fetter_count"),
    ("towerStarIndex", "tower_star_index"),
    ("stygianIndex", "stygian_index"),
    ("stygianSeconds", "stygian_seconds"),
    ("stygianId", "stygian_id"),
)


class AssetMapper:
    """
    Joins a raw Enka profile against the reference datasets.

    Every id in the profile (profile picture, name card, each showcased
    character) must exist in its dataset, otherwise the whole resolution fails
    with `EnkaMappingError`. There are no partial results.
    """

    def __init__(self, data_store: ReferenceDataStore, url_builder: UrlBuilder):
        self.data_store = data_store
        self.url_builder = url_builder

    async def map_player_assets(self, api_response: EnkaApiResponse) -> ResolvedPlayerAssets:
        player_info = api_response["playerInfo"]
        profile_picture_id = (player_info.get("profilePicture") or {}).get("id")
        show_avatars_info = player_info.get("showAvatarInfoList") or []

        profile_picture, name_card, *show_avatars = await asyncio.gather(
            self.map_profile_picture(profile_picture_id),
            self.map_name_card(player_info.get("nameCardId")),
            *(self.map_show_avatar(avatar) for avatar in show_avatars_info),
        )

        logger.info("Resolved assets for %s (%d characters)",
                    player_info.get("nickname"), len(show_avatars))
        return ResolvedPlayerAssets(
            player_info=self._copy_player_info(player_info),
            profile_picture=profile_picture,
            name_card=name_card,
            show_avatars=show_avatars,
            ttl=api_response.get("ttl"),
            last_updated=datetime.datetime.now(datetime.UTC),
        )

    @staticmethod
    def _copy_player_info(player_info: PlayerInfo) -> ResolvedPlayerInfo:
        return ResolvedPlayerInfo(**{out: player_info.get(wire) for wire, out in PLAYER_INFO_FIELDS})

    async def map_profile_picture(self, pfp_id: Optional[int]) -> ResolvedProfilePicture:
        pfps = await self.data_store.get_profile_pictures()
        pfp = pfps.get(str(pfp_id))
        if not pfp:
            raise EnkaMappingError(f"Profile picture not found for ID: {pfp_id}", pfp_id,
                                   DatasetKind.PROFILE_PICTURES)

        icon_path = pfp["IconPath"]
        return ResolvedProfilePicture(
            id=pfp_id,
            icon_name=icon_path,
            url=f"{PROFILE_PICTURE_HOST}{icon_path}",
        )

    async def map_name_card(self, name_card_id: Optional[int]) -> ResolvedNameCard:
        name_cards = await self.data_store.get_name_cards()
        name_card = name_cards.get(str(name_card_id))
        if not name_card:
            raise EnkaMappingError(f"Name card not found for ID: {name_card_id}", name_card_id,
                                   DatasetKind.NAME_CARDS)

        icon = name_card["Icon"]
        return ResolvedNameCard(
            id=name_card_id,
            icon_name=icon,
            url=self.url_builder.build_name_card_url(icon),
        )

    async def map_show_avatar(self, avatar: ShowAvatarInfo) -> ResolvedShowAvatar:
        avatar_id = avatar.get("avatarId")
        characters = await self.data_store.get_characters()
        character = characters.get(str(avatar_id))
        if not character:
            raise EnkaMappingError(f"Character not found for ID: {avatar_id}", avatar_id,
                                   DatasetKind.CHARACTERS)

        icon_name = transform_icon_name(character["SideIconName"])
        return ResolvedShowAvatar(
            avatar_id=avatar_id,
            icon_name=icon_name,
            url=self.url_builder.build_character_icon_url(icon_name),
            quality=get_quality_numeric(character.get("QualityType")),
            level=avatar.get("level"),
            talent_level=avatar.get("talentLevel"),
            element=character.get("Element"),
            weapon_type=character.get("WeaponType"),
        )

    async def get_character_data(self, avatar_id: int | str) -> Optional[dict[str, Any]]:
        characters = await self.data_store.get_characters()
        return copy.deepcopy(characters.get(str(avatar_id)))

    async def get_profile_picture_data(self, pfp_id: int | str) -> Optional[dict[str, Any]]:
        pfps = await self.data_store.get_profile_pictures()
        return copy.deepcopy(pfps.get(str(pfp_id)))

    async def get_name_card_data(self, name_card_id: int | str) -> Optional[dict[str, Any]]:
        name_cards = await self.data_store.get_name_cards()
        return copy.deepcopy(name_cards.get(str(name_card_id)))

    async def has_character(self, avatar_id: int | str) -> bool:
        return str(avatar_id) in await self.data_store.get_characters()

    async def has_profile_picture(self, pfp_id: int | str) -> bool:
        return str(pfp_id) in await self.data_store.get_profile_pictures()

    async def has_name_card(self, name_card_id: int | str) -> bool:
        return str(name_card_id) in await self.data_store.get_name_cards()

    async def get_data_stats(self) -> DataStats:
        datasets = await self.data_store.preload_all()
        return DataStats(
            characters=len(datasets[DatasetKind.CHARACTERS]),
            profile_pictures=len(datasets[DatasetKind.PROFILE_PICTURES]),
            name_cards=len(datasets[DatasetKind.NAME_CARDS]),
        )

    def get_data_cache_info(self):
        return self.data_store.cache_info()

    def clear_data_cache(self) -> None:
        self.data_store.clear_cache()


__all__ = [
    "AssetMapper",
    "DatasetKind",
    "ReferenceDataStore",
    "UrlBuilder",
    "PROFILE_PICTURE_HOST",
]

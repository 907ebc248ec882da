import datetime
from typing import Optional, TypedDict

from enka_assets.assets.helpers import QualityNumeric


class ResolvedProfilePicture(TypedDict):
    id: int
    icon_name: str
    url: str


class ResolvedNameCard(TypedDict):
    id: int
    icon_name: str
    url: str


class ResolvedShowAvatar(TypedDict):
    avatar_id: int
    icon_name: str
    url: str
    quality: QualityNumeric
    level: int
    talent_level: Optional[int]
    element: Optional[str]
    weapon_type: Optional[str]


class ResolvedPlayerInfo(TypedDict):
    nickname: str
    level: int
    signature: Optional[str]
    world_level: Optional[int]
    finish_achievement_num: Optional[int]
    tower_floor_index: Optional[int]
    tower_level_index: Optional[int]
    theater_act_index: Optional[int]
    theater_mode_index: Optional[int]
    theater_star_index: Optional[int]
    is_show_avatar_talent: Optional[bool]
    fetter_count: Optional[int]
    tower_star_index: Optional[int]
    stygian_index: Optional[int]
    stygian_seconds: Optional[int]
    stygian_id: Optional[int]


class ResolvedPlayerAssets(TypedDict):
    player_info: ResolvedPlayerInfo
    profile_picture: ResolvedProfilePicture
    name_card: ResolvedNameCard
    show_avatars: list[ResolvedShowAvatar]
    ttl: Optional[int]
    last_updated: datetime.datetime  # UTC


class DataStats(TypedDict):
    characters: int
    profile_pictures: int
    name_cards: int

from typing import Any, NotRequired, TypedDict


class ProfilePictureRef(TypedDict):
    id: NotRequired[int]
    avatarId: NotRequired[int]
    costumeId: NotRequired[int]


class ShowAvatarInfo(TypedDict):
    """
    One entry of `playerInfo.showAvatarInfoList`, the characters a player
    pins on their profile.
    """
    avatarId: int
    level: int
    talentLevel: NotRequired[int]
    energyType: NotRequired[int]
    costumeId: NotRequired[int]


class PlayerInfo(TypedDict):
    nickname: str
    level: int
    signature: NotRequired[str]
    worldLevel: int
    nameCardId: int
    finishAchievementNum: int
    towerFloorIndex: NotRequired[int]
    towerLevelIndex: NotRequired[int]
    showAvatarInfoList: NotRequired[list[ShowAvatarInfo]]
    showNameCardIdList: NotRequired[list[int]]
    profilePicture: ProfilePictureRef
    theaterActIndex: NotRequired[int]
    theaterModeIndex: NotRequired[int]
    theaterStarIndex: NotRequired[int]
    isShowAvatarTalent: NotRequired[bool]
    fetterCount: NotRequired[int]
    towerStarIndex: NotRequired[int]
    stygianIndex: NotRequired[int]
    stygianSeconds: NotRequired[int]
    stygianId: NotRequired[int]


class EnkaApiResponse(TypedDict):
    playerInfo: PlayerInfo
    # talents, equipment and fight props are carried as-is and never decoded
    avatarInfoList: NotRequired[list[dict[str, Any]]]
    ttl: NotRequired[int]
    uid: NotRequired[str]
    owner: NotRequired[dict[str, Any]]

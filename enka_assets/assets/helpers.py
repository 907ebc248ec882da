from typing import Literal

from enka_assets.assets.data_fetcher import DatasetKind
from enka_assets.lib.errors import EnkaMappingError

QualityNumeric = Literal[4, 5]

QUALITY_MAPPING: dict[str, QualityNumeric] = {
    "QUALITY_ORANGE": 5,
    "QUALITY_PURPLE": 4,
}

SIDE_ICON_MARKER = "_Side_"


def get_quality_numeric(quality_type: str) -> QualityNumeric:
    """
    Convert a character QualityType label to its rarity tier.
    Labels other than QUALITY_ORANGE / QUALITY_PURPLE are rejected.
    """
    try:
        return QUALITY_MAPPING[quality_type]
    except KeyError:
        raise EnkaMappingError(f"Unknown quality type: {quality_type}", missing_id=quality_type,
                               dataset=DatasetKind.CHARACTERS) from None


def transform_icon_name(side_icon_name: str) -> str:
    """UI_AvatarIcon_Side_Ayaka -> UI_AvatarIcon_Ayaka"""
    return side_icon_name.replace(SIDE_ICON_MARKER, "_", 1)

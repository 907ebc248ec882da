from enum import Enum
from typing import Iterable

from enka_assets.lib.config import DEFAULT_BASE_URL


class AssetFormat(str, Enum):
    PNG = "png"
    WEBP = "webp"

    @property
    def extension(self) -> str:
        return f".{self.value}"


class AssetSize(str, Enum):
    ORIGINAL = "original"
    SMALL = "small"
    MEDIUM = "medium"

    @property
    def suffix(self) -> str:
        return "" if self is AssetSize.ORIGINAL else f"_{self.value}"


class UrlBuilder:
    """
    Turns icon names from the reference datasets into asset URLs under
    `base_url`, e.g. `{base_url}/UI_AvatarIcon_Ayaka_small.webp`.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url

    def build_url(self, icon_name: str,
                  format: AssetFormat | str = AssetFormat.PNG,
                  size: AssetSize | str = AssetSize.ORIGINAL) -> str:
        fmt = AssetFormat(format)
        asset_size = AssetSize(size)
        return f"{self.base_url}/{icon_name}{asset_size.suffix}{fmt.extension}"

    def build_character_icon_url(self, icon_name: str, **options) -> str:
        return self.build_url(icon_name, **options)

    def build_name_card_url(self, icon_name: str, **options) -> str:
        return self.build_url(icon_name, **options)

    def build_profile_picture_url(self, icon_path: str, **options) -> str:
        return self.build_url(icon_path, **options)

    def build_multiple_urls(self, icon_names: Iterable[str], **options) -> list[str]:
        return [self.build_url(name, **options) for name in icon_names]

    @staticmethod
    def is_valid_icon_name(icon_name: str) -> bool:
        # naming convention check only, nothing else relies on it
        return icon_name.startswith("UI_")

    @staticmethod
    def supported_formats() -> list[str]:
        return [f.value for f in AssetFormat]

    @staticmethod
    def supported_sizes() -> list[str]:
        return [s.value for s in AssetSize]

from enka_assets.assets import AssetMapper, PROFILE_PICTURE_HOST
from enka_assets.assets.data_fetcher import DatasetKind, ReferenceDataStore, REFERENCE_DATA_TTL
from enka_assets.assets.helpers import get_quality_numeric, transform_icon_name
from enka_assets.assets.structures import (
    ResolvedNameCard,
    ResolvedPlayerAssets,
    ResolvedPlayerInfo,
    ResolvedProfilePicture,
    ResolvedShowAvatar,
)
from enka_assets.assets.url_builder import AssetFormat, AssetSize, UrlBuilder
from enka_assets.enka_tracker import EnkaApiClient
from enka_assets.lib.cache import CacheManager
from enka_assets.lib.config import AssetConfig, DEFAULT_CONFIG
from enka_assets.lib.errors import (
    EnkaApiError,
    EnkaAssetError,
    EnkaDataFetchError,
    EnkaInvalidResponseError,
    EnkaMappingError,
    EnkaRateLimitError,
    EnkaTransportError,
    EnkaUnexpectedError,
)
from enka_assets.wrapper import EnkaAssetWrapper

__version__ = "1.0.0"

__all__ = [
    "AssetConfig",
    "AssetFormat",
    "AssetMapper",
    "AssetSize",
    "CacheManager",
    "DEFAULT_CONFIG",
    "DatasetKind",
    "EnkaApiClient",
    "EnkaApiError",
    "EnkaAssetError",
    "EnkaAssetWrapper",
    "EnkaDataFetchError",
    "EnkaInvalidResponseError",
    "EnkaMappingError",
    "EnkaRateLimitError",
    "EnkaTransportError",
    "EnkaUnexpectedError",
    "PROFILE_PICTURE_HOST",
    "REFERENCE_DATA_TTL",
    "ReferenceDataStore",
    "ResolvedNameCard",
    "ResolvedPlayerAssets",
    "ResolvedPlayerInfo",
    "ResolvedProfilePicture",
    "ResolvedShowAvatar",
    "UrlBuilder",
    "get_quality_numeric",
    "transform_icon_name",
]

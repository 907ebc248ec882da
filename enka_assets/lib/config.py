import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://enka.network/ui"
DEFAULT_API_URL = "https://enka.network/api"
DEFAULT_CACHE_DURATION = 60 * 60  # 1 hour, in seconds
DEFAULT_USER_AGENT = "enka-asset-wrapper/1.0.0"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AssetConfig:
    """
    Runtime configuration shared by every component of the wrapper.
    Durations are expressed in seconds.
    """
    base_url: str = DEFAULT_BASE_URL
    api_url: str = DEFAULT_API_URL
    cache_duration: float = DEFAULT_CACHE_DURATION
    enable_cache: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    def merge(self, **overrides: Any) -> "AssetConfig":
        """
        Return a copy with the given fields replaced. Fields left out, or passed
        as None, keep their current value.
        """
        fields = {f.name for f in dataclasses.fields(self)}
        unknown = set(overrides) - fields
        if unknown:
            raise TypeError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AssetConfig":
        if env_file:
            load_dotenv(env_file)

        cache_duration = os.getenv("ENKA_CACHE_DURATION")
        enable_cache = os.getenv("ENKA_ENABLE_CACHE")
        return cls().merge(
            base_url=os.getenv("ENKA_BASE_URL"),
            api_url=os.getenv("ENKA_API_URL"),
            cache_duration=float(cache_duration) if cache_duration else None,
            enable_cache=enable_cache.strip().lower() in _TRUTHY if enable_cache else None,
            user_agent=os.getenv("ENKA_USER_AGENT"),
        )


DEFAULT_CONFIG = AssetConfig()

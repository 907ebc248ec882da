from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from enka_assets.assets.data_fetcher import DatasetKind


class EnkaAssetError(Exception):
    """
    Base class for every error raised by the library.
    """

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class EnkaApiError(EnkaAssetError):
    """
    The Enka API (or a reference data host) answered with something unusable.
    `status_code` is set when the failure came from a non-2xx response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, "API_ERROR", status_code)


class EnkaRateLimitError(EnkaApiError):
    def __init__(self, message: str = "Rate limited by Enka API. Please try again later."):
        super().__init__(message, 429)


class EnkaTransportError(EnkaApiError):
    """Network failure or timeout while reaching an external host."""


class EnkaInvalidResponseError(EnkaApiError):
    """Successful response that lacks the mandatory `playerInfo` section."""


class EnkaDataFetchError(EnkaApiError):
    def __init__(self, message: str, dataset: "DatasetKind", status_code: Optional[int] = None):
        super().__init__(message, status_code)
        self.dataset = dataset


class EnkaMappingError(EnkaAssetError):
    """
    Raised when an id coming from the live profile has no entry in the
    matching reference dataset.
    """

    def __init__(self, message: str, missing_id: str | int | None = None,
                 dataset: Optional["DatasetKind"] = None):
        super().__init__(message, "MAPPING_ERROR")
        self.missing_id = missing_id
        self.dataset = dataset


class EnkaUnexpectedError(EnkaAssetError):
    def __init__(self, message: str):
        super().__init__(message, "UNEXPECTED_ERROR")

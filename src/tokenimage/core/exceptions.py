"""TokenImage exception hierarchy.

This module defines the base exception class and specialized exceptions
for the catalog, image and cache failure categories.
"""


class TokenImageServiceError(Exception):
    """Base exception for all TokenImage errors.

    All custom exceptions in TokenImage should inherit from this class
    to enable consistent error handling and logging.
    """

    pass


class ExternalServiceError(TokenImageServiceError):
    """Raised when an external service call fails.

    Use this for non-success responses and transport errors from CoinGecko
    or the image hosts it links to.

    Attributes:
        service: Name of the external service that failed.
        status_code: HTTP status code if available, None otherwise.

    Example:
        raise ExternalServiceError(service="coingecko", message="Not Found", status_code=404)
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class CacheUnavailableError(TokenImageServiceError):
    """Raised when the cache backend cannot be reached.

    Never fatal to a request: reads treat it as a miss and background
    writes only log it.

    Example:
        raise CacheUnavailableError("Redis: Connection refused")
    """

    pass


class CatalogError(TokenImageServiceError):
    """Base class for token list resolution failures."""

    pass


class UpstreamUnavailableError(CatalogError):
    """Raised when the token list endpoint answers with a non-success status."""

    pass


class UpstreamEmptyError(CatalogError):
    """Raised when the token list endpoint returns no usable list."""

    pass


class TokenImageError(TokenImageServiceError):
    """Base class for token image resolution failures.

    Attributes:
        symbol: Requested ticker symbol (if available).
    """

    def __init__(self, message: str, symbol: str | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol


class TokenNotFoundError(TokenImageError):
    """Raised when no catalog token matches the requested symbol."""

    pass


class DetailFetchError(TokenImageError):
    """Raised when fetching details for any candidate token fails."""

    pass


class ImageFetchError(TokenImageError):
    """Raised when the selected token's image cannot be downloaded."""

    pass

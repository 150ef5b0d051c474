"""Cache store protocol and key derivation."""

from typing import Any, Protocol

from tokenimage.constants.token import TOKEN_IMAGE_KEY_PREFIX, TOKEN_LIST_KEY
from tokenimage.models.token import ImageSize


class CacheStore(Protocol):
    """Key/value store for serialized token lists and base64 images.

    Implementations raise CacheUnavailableError when the backend cannot be
    reached. A missing key is not an error: get() returns None.
    """

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def flush_all(self) -> None: ...

    async def health_check(self) -> dict[str, Any]: ...

    async def close(self) -> None: ...


def token_list_key() -> str:
    """Cache key of the global token list, shared by every request."""
    return TOKEN_LIST_KEY


def token_image_key(symbol: str, size: ImageSize) -> str:
    """Cache key of one token image.

    Args:
        symbol: Ticker symbol as requested (any case).
        size: Requested image size.

    Returns:
        Key of the form tokenImage:<symbol>-<size>, symbol lowercased.
    """
    return f"{TOKEN_IMAGE_KEY_PREFIX}:{symbol.lower()}-{size.value}"

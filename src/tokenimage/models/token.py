"""Token-related Pydantic models.

This module defines the token list entries and token details returned by
CoinGecko, plus the image size and image format enumerations.
All models use Pydantic BaseModel (not dataclass).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ImageSize(str, Enum):
    """Requested icon size.

    Each size maps to exactly one image URL variant on CoinGecko.
    """

    XS = "xs"
    SM = "sm"
    LG = "lg"


class ImageFormat(str, Enum):
    """Image format detected from leading bytes."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"
    UNKNOWN = "unknown"

    @property
    def content_type(self) -> str:
        """MIME type for HTTP responses (image/<format>)."""
        return f"image/{self.value}"


class Token(BaseModel):
    """Entry of the CoinGecko token list.

    Attributes:
        id: Opaque CoinGecko coin identifier (e.g., "ethereum").
        symbol: Ticker symbol, matched case-insensitively.
        name: Human readable token name.

    Example:
        token = Token(id="ethereum", symbol="eth", name="Ethereum")
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(description="CoinGecko coin id")
    symbol: str = Field(description="Ticker symbol")
    name: str = Field(default="", description="Token name")

    def matches_symbol(self, symbol: str) -> bool:
        """Check whether this token has the given ticker, ignoring case."""
        return self.symbol.lower() == symbol.lower()


class TokenImageUrls(BaseModel):
    """Image URLs for the three sizes CoinGecko publishes."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    thumb: str
    small: str
    large: str

    def url_for(self, size: ImageSize) -> str:
        """Select the URL variant for a requested size.

        Args:
            size: Requested image size.

        Returns:
            thumb for xs, small for sm, large for lg.
        """
        if size is ImageSize.XS:
            return self.thumb
        if size is ImageSize.SM:
            return self.small
        return self.large


class TokenDetails(BaseModel):
    """Subset of CoinGecko coin details used to pick an icon.

    Attributes:
        id: CoinGecko coin id.
        image: Per-size image URLs.
        market_cap_rank: Positive rank, None when unranked.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    image: TokenImageUrls
    market_cap_rank: int | None = Field(default=None, ge=1)

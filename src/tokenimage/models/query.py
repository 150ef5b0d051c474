"""Parsed forms of the token image query string.

The raw query is decoded once into exactly one of these variants and
matched exhaustively by the request handler.
"""

from pydantic import BaseModel, ConfigDict

from tokenimage.models.token import ImageSize


class ClearCacheQuery(BaseModel):
    """Cache flush directive (clearCache=true)."""

    model_config = ConfigDict(frozen=True)


class ImageQuery(BaseModel):
    """Well-formed icon request."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    size: ImageSize


class InvalidQuery(BaseModel):
    """Query that is neither a cache flush nor a valid icon request."""

    model_config = ConfigDict(frozen=True)

    reason: str


ParsedQuery = ClearCacheQuery | ImageQuery | InvalidQuery

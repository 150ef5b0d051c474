"""Domain models for TokenImage."""

from tokenimage.models.query import ClearCacheQuery, ImageQuery, InvalidQuery, ParsedQuery
from tokenimage.models.token import (
    ImageFormat,
    ImageSize,
    Token,
    TokenDetails,
    TokenImageUrls,
)

__all__ = [
    "ClearCacheQuery",
    "ImageFormat",
    "ImageQuery",
    "ImageSize",
    "InvalidQuery",
    "ParsedQuery",
    "Token",
    "TokenDetails",
    "TokenImageUrls",
]

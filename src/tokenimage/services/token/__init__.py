"""Token list and token image resolution."""

from tokenimage.services.token.catalog import TokenCatalogResolver
from tokenimage.services.token.image import (
    TokenImageResolver,
    filter_candidates,
    rank_candidates,
)
from tokenimage.services.token.image_format import detect_image_format

__all__ = [
    "TokenCatalogResolver",
    "TokenImageResolver",
    "detect_image_format",
    "filter_candidates",
    "rank_candidates",
]

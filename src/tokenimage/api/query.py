"""Decode the raw token image query string."""

from collections.abc import Mapping

from tokenimage.models.query import ClearCacheQuery, ImageQuery, InvalidQuery, ParsedQuery
from tokenimage.models.token import ImageSize

_SIZES = {size.value: size for size in ImageSize}


def parse_query(params: Mapping[str, str]) -> ParsedQuery:
    """Turn query parameters into a ParsedQuery variant.

    clearCache=true wins over any other parameter. clearCache=false is
    accepted but does not clear, so the query is then judged on symbol
    and size like any other.

    Args:
        params: Raw query parameters.

    Returns:
        ClearCacheQuery, ImageQuery or InvalidQuery.
    """
    if params.get("clearCache") == "true":
        return ClearCacheQuery()

    symbol = params.get("symbol")
    if not symbol:
        return InvalidQuery(reason="symbol is required")

    size = _SIZES.get(params.get("size") or "")
    if size is None:
        return InvalidQuery(reason="size must be one of xs, sm, lg")

    return ImageQuery(symbol=symbol, size=size)

"""Token image endpoint."""

import structlog
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from tokenimage.api.dependencies import CacheStoreDep, ImageResolverDep
from tokenimage.api.query import parse_query
from tokenimage.core.exceptions import (
    CacheUnavailableError,
    CatalogError,
    TokenImageError,
)
from tokenimage.data.cache.base import CacheStore
from tokenimage.models.query import ClearCacheQuery, ImageQuery, InvalidQuery
from tokenimage.services.token.image import TokenImageResolver
from tokenimage.services.token.image_format import detect_image_format

log = structlog.get_logger(__name__)

router = APIRouter(tags=["token-image"])


@router.get("/")
async def get_token_image(
    request: Request,
    cache: CacheStoreDep,
    resolver: ImageResolverDep,
) -> Response:
    """
    Serve the icon of a token.

    Query: symbol=<ticker>&size=<xs|sm|lg>, or clearCache=true to flush
    every cached token list and image.
    """
    query = parse_query(request.query_params)

    match query:
        case ClearCacheQuery():
            return await _clear_cache(cache)
        case ImageQuery():
            return await _serve_image(query, resolver)
        case InvalidQuery(reason=reason):
            log.warning("invalid_query", reason=reason, params=dict(request.query_params))
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Invalid query"},
            )


async def _clear_cache(cache: CacheStore) -> Response:
    try:
        await cache.flush_all()
    except CacheUnavailableError as e:
        log.error("cache_clear_failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Error clearing cache:: {e}"},
        )

    log.info("cache_cleared")
    return JSONResponse(content={"message": "Cache cleared"})


async def _serve_image(query: ImageQuery, resolver: TokenImageResolver) -> Response:
    with structlog.contextvars.bound_contextvars(symbol=query.symbol, size=query.size.value):
        try:
            image = await resolver.resolve(query.symbol, query.size)
        except CatalogError as e:
            log.error("token_list_resolution_failed", error=str(e))
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": f"Error fetching token list:: {e}"},
            )
        except TokenImageError as e:
            log.error("token_image_resolution_failed", error=str(e))
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": f"Token image not found:: {e}"},
            )

        image_format = detect_image_format(image)
        log.info("token_image_served", image_format=image_format.value, bytes=len(image))
        return Response(content=image, media_type=image_format.content_type)

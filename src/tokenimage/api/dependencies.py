"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from tokenimage.config.settings import Settings, get_settings
from tokenimage.data.cache.base import CacheStore
from tokenimage.data.cache.factory import get_cache_store
from tokenimage.services.coingecko.client import CoinGeckoClient, get_coingecko_client
from tokenimage.services.token.catalog import TokenCatalogResolver
from tokenimage.services.token.image import TokenImageResolver

SettingsDep = Annotated[Settings, Depends(get_settings)]
CacheStoreDep = Annotated[CacheStore, Depends(get_cache_store)]
CoinGeckoDep = Annotated[CoinGeckoClient, Depends(get_coingecko_client)]


async def get_catalog_resolver(
    coingecko: CoinGeckoDep,
    cache: CacheStoreDep,
) -> TokenCatalogResolver:
    """Get token list resolver dependency."""
    return TokenCatalogResolver(coingecko, cache)


CatalogResolverDep = Annotated[TokenCatalogResolver, Depends(get_catalog_resolver)]


async def get_image_resolver(
    coingecko: CoinGeckoDep,
    catalog: CatalogResolverDep,
    cache: CacheStoreDep,
) -> TokenImageResolver:
    """Get token image resolver dependency."""
    return TokenImageResolver(coingecko, catalog, cache)


ImageResolverDep = Annotated[TokenImageResolver, Depends(get_image_resolver)]

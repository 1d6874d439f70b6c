"""FastAPI dependencies wiring configuration, HTTP client and resolvers."""

from functools import lru_cache
from typing import AsyncIterator

import httpx
from fastapi import Depends

from app.config import SiteConfig, load_config
from app.services.collection import CollectionResolver
from app.services.taxonomy import TaxonomyResolver
from app.services.walker import CatalogWalker
from app.services.wordpress import WordPressAPI, build_client


@lru_cache
def get_config() -> SiteConfig:
    return load_config()


async def get_http_client(config: SiteConfig = Depends(get_config)) -> AsyncIterator[httpx.AsyncClient]:
    """One client per request, closed once the request is finished."""
    async with build_client(config) as client:
        yield client


def get_api(
    config: SiteConfig = Depends(get_config),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> WordPressAPI:
    return WordPressAPI(config, client)


def get_collections(api: WordPressAPI = Depends(get_api)) -> CollectionResolver:
    return CollectionResolver(api)


def get_taxonomies(api: WordPressAPI = Depends(get_api)) -> TaxonomyResolver:
    return TaxonomyResolver(api)


def get_walker(
    config: SiteConfig = Depends(get_config),
    collections: CollectionResolver = Depends(get_collections),
) -> CatalogWalker:
    return CatalogWalker(collections, max_iterations=config.max_walk_iterations)

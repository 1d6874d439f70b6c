import logging
from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from app.config import SiteConfig
from app.dependencies import get_collections, get_config, get_walker
from app.errors import RuntimeLoopError, UpstreamError
from app.limits import limiter
from app.services.collection import CollectionFilter, CollectionResolver
from app.services.pagination import page_links, parse_page_number
from app.services.seo import build_seo, post_seo
from app.services.walker import CatalogWalker, WalkStrategy
from app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])


class PostSlug(BaseModel):
    slug: str


@router.get("/posts", response_class=HTMLResponse, summary="List all posts")
async def list_posts(
    request: Request,
    page: Optional[str] = None,
    config: SiteConfig = Depends(get_config),
    collections: CollectionResolver = Depends(get_collections),
) -> HTMLResponse:
    """Render one page of the full post listing (``?page=`` is 1-indexed)."""
    page_number = parse_page_number(page)
    listing = await collections.resolve_listing(
        CollectionFilter.all(), page_number, config.posts_per_page
    )

    return templates.TemplateResponse(
        request,
        "posts.html",
        {
            "seo": build_seo(config, f"All posts - Page {page_number}", "All posts", "/posts"),
            "listing": listing,
            "links": page_links("/posts", page_number, listing.total_pages),
        },
    )


@router.get(
    "/api/post-slugs",
    response_model=List[PostSlug],
    summary="Enumerate every post slug",
    description=(
        "Walks the whole catalog (one request per page, as many pages as the "
        "API declares) and returns every post slug, e.g. for static-path generation."
    ),
)
@limiter.limit("5/minute")
async def post_slugs(
    request: Request,
    config: SiteConfig = Depends(get_config),
    walker: CatalogWalker = Depends(get_walker),
) -> List[PostSlug]:
    try:
        slugs = [
            PostSlug(slug=item.slug)
            async for item in walker.walk_all(config.posts_per_page, WalkStrategy.TOTAL_PAGES)
        ]
    except UpstreamError as exc:
        logger.error("Slug enumeration failed: %s", exc)
        raise HTTPException(status_code=502, detail=f"Content API returned HTTP {exc.status_code}.")
    except RuntimeLoopError as exc:
        logger.error("Slug enumeration aborted: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc))
    except httpx.TimeoutException:
        logger.error("Slug enumeration timed out")
        raise HTTPException(status_code=504, detail="The content API timed out.")
    except httpx.RequestError as exc:
        logger.error("Slug enumeration failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc))

    logger.info("Enumerated %d post slugs", len(slugs))
    return slugs


@router.get("/posts/{slug}", response_class=HTMLResponse, summary="Show a single post")
async def show_post(
    request: Request,
    slug: str,
    config: SiteConfig = Depends(get_config),
    collections: CollectionResolver = Depends(get_collections),
) -> HTMLResponse:
    post = await collections.get_by_slug(slug)
    return templates.TemplateResponse(
        request,
        "post.html",
        {"seo": post_seo(config, post), "post": post},
    )

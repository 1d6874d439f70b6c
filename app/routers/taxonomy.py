from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.config import SiteConfig
from app.dependencies import get_collections, get_config, get_taxonomies
from app.models.taxonomy import TaxonomyKind
from app.services.collection import CollectionFilter, CollectionResolver
from app.services.pagination import page_links, parse_page_number
from app.services.seo import taxonomy_heading, taxonomy_seo
from app.services.taxonomy import TaxonomyResolver
from app.templating import templates

router = APIRouter(tags=["Taxonomies"])


async def _render_term_listing(
    request: Request,
    kind: TaxonomyKind,
    slug: str,
    page: Optional[str],
    config: SiteConfig,
    taxonomies: TaxonomyResolver,
    collections: CollectionResolver,
) -> HTMLResponse:
    page_number = parse_page_number(page)
    term = await taxonomies.resolve(kind, slug)
    listing = await collections.resolve_listing(
        CollectionFilter.by_term(term), page_number, config.posts_per_page
    )
    base_url = f"/{kind.value}/{term.slug}"

    return templates.TemplateResponse(
        request,
        "taxonomy.html",
        {
            "seo": taxonomy_seo(config, term, page_number),
            "heading": taxonomy_heading(term),
            "term": term,
            "listing": listing,
            "links": page_links(base_url, page_number, listing.total_pages),
        },
    )


@router.get("/category/{slug}", response_class=HTMLResponse, summary="Posts in a category")
async def category_page(
    request: Request,
    slug: str,
    page: Optional[str] = None,
    config: SiteConfig = Depends(get_config),
    taxonomies: TaxonomyResolver = Depends(get_taxonomies),
    collections: CollectionResolver = Depends(get_collections),
) -> HTMLResponse:
    return await _render_term_listing(
        request, TaxonomyKind.CATEGORY, slug, page, config, taxonomies, collections
    )


@router.get("/tag/{slug}", response_class=HTMLResponse, summary="Posts with a tag")
async def tag_page(
    request: Request,
    slug: str,
    page: Optional[str] = None,
    config: SiteConfig = Depends(get_config),
    taxonomies: TaxonomyResolver = Depends(get_taxonomies),
    collections: CollectionResolver = Depends(get_collections),
) -> HTMLResponse:
    return await _render_term_listing(
        request, TaxonomyKind.TAG, slug, page, config, taxonomies, collections
    )

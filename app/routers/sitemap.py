import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from app.config import SiteConfig
from app.dependencies import get_config, get_walker
from app.errors import RuntimeLoopError
from app.limits import limiter
from app.services.sitemap import build_sitemap
from app.services.walker import CatalogWalker, WalkStrategy

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sitemap"])


@router.get(
    "/sitemap.xml",
    summary="XML sitemap of every post",
    description=(
        "Pages through the whole catalog until a short page is returned. "
        "If the content API fails part-way, the posts gathered so far are listed."
    ),
)
@limiter.limit("10/minute")
async def sitemap(
    request: Request,
    config: SiteConfig = Depends(get_config),
    walker: CatalogWalker = Depends(get_walker),
) -> Response:
    try:
        posts = await walker.collect(config.sitemap_page_size, WalkStrategy.SHORT_PAGE)
    except RuntimeLoopError as exc:
        logger.error("Sitemap generation aborted: %s", exc)
        return PlainTextResponse("Sitemap temporarily unavailable.", status_code=503)

    site_url = config.site_url
    if not site_url:
        site_url = str(request.base_url).rstrip("/")
        logger.warning("No site URL configured; sitemap URLs use the request origin %s", site_url)

    return Response(content=build_sitemap(site_url, posts), media_type="application/xml")

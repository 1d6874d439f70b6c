from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.config import SiteConfig
from app.dependencies import get_config
from app.models.map_point import MapView
from app.services.map_points import MAP_VIEW
from app.services.seo import build_seo
from app.templating import templates

router = APIRouter(prefix="/map", tags=["Map"])


@router.get("", response_class=HTMLResponse, summary="Map of featured locations")
async def map_page(request: Request, config: SiteConfig = Depends(get_config)) -> HTMLResponse:
    seo = build_seo(config, "Caribbean Ports Map", "Ports featured on the blog.", "/map")
    return templates.TemplateResponse(request, "map.html", {"seo": seo, "view": MAP_VIEW})


@router.get("/points.json", response_model=MapView, summary="Map points as JSON")
async def map_points() -> MapView:
    """Points, centre and zoom for an external map widget."""
    return MAP_VIEW

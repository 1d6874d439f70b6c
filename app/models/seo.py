from typing import Literal

from pydantic import BaseModel


class SeoMeta(BaseModel):
    """Values rendered into the document ``<head>``."""

    title: str
    description: str
    canonical_url: str
    og_type: Literal["website", "article"] = "website"
    og_image: str
    site_name: str

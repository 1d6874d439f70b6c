"""Head metadata (title, description, canonical, Open Graph) for rendered pages."""

from typing import Literal, Optional

from bs4 import BeautifulSoup

from app.config import SiteConfig
from app.models.content import ContentItem
from app.models.seo import SeoMeta
from app.models.taxonomy import TaxonomyKind, TaxonomyTerm

DEFAULT_OG_IMAGE = "/default-og-image.jpg"


def html_to_text(html: str) -> str:
    """Return the visible text of an HTML fragment on a single line."""
    if not html:
        return ""
    return BeautifulSoup(html, "lxml").get_text(separator=" ", strip=True)


def build_seo(
    config: SiteConfig,
    title: str,
    description: str,
    path: str,
    og_type: Literal["website", "article"] = "website",
    og_image: Optional[str] = None,
) -> SeoMeta:
    """Assemble :class:`SeoMeta`; *path* is made absolute against the site URL."""
    return SeoMeta(
        title=f"{title} | {config.site_name}",
        description=description,
        canonical_url=config.absolute_url(path),
        og_type=og_type,
        og_image=og_image or DEFAULT_OG_IMAGE,
        site_name=config.site_name,
    )


def post_seo(config: SiteConfig, post: ContentItem) -> SeoMeta:
    return build_seo(
        config,
        title=html_to_text(post.title),
        description=html_to_text(post.excerpt),
        path=f"/posts/{post.slug}",
        og_type="article",
        og_image=post.featured_media.url if post.featured_media else None,
    )


def taxonomy_heading(term: TaxonomyTerm) -> str:
    if term.kind is TaxonomyKind.CATEGORY:
        return term.name
    return f'Posts tagged with "{term.name}"'


def taxonomy_seo(config: SiteConfig, term: TaxonomyTerm, page_number: int) -> SeoMeta:
    if term.kind is TaxonomyKind.CATEGORY:
        fallback = f'Posts in the "{term.name}" category'
    else:
        fallback = f'Posts tagged with "{term.name}"'
    return build_seo(
        config,
        title=f"{taxonomy_heading(term)} - Page {page_number}",
        description=html_to_text(term.description) or fallback,
        path=f"/{term.kind.value}/{term.slug}",
    )

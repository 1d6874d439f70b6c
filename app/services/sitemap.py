"""XML sitemap generation."""

from datetime import datetime
from typing import Iterable
from xml.etree import ElementTree

from app.models.content import ContentItem

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _add_url(urlset: ElementTree.Element, loc: str, changefreq: str, priority: str, lastmod: str = "") -> None:
    url = ElementTree.SubElement(urlset, "url")
    ElementTree.SubElement(url, "loc").text = loc
    if lastmod:
        ElementTree.SubElement(url, "lastmod").text = lastmod
    ElementTree.SubElement(url, "changefreq").text = changefreq
    ElementTree.SubElement(url, "priority").text = priority


def _lastmod(modified_at: datetime) -> str:
    # W3C datetimes with a time part need an offset
    if modified_at.tzinfo is None:
        return modified_at.date().isoformat()
    return modified_at.isoformat()


def build_sitemap(site_url: str, posts: Iterable[ContentItem]) -> str:
    """Return a sitemap listing the home page, the post index and every post."""
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    _add_url(urlset, site_url or "/", "daily", "1.0")
    _add_url(urlset, f"{site_url}/posts", "daily", "0.8")
    for post in posts:
        _add_url(
            urlset,
            f"{site_url}/posts/{post.slug}",
            "weekly",
            "0.7",
            lastmod=_lastmod(post.modified_at),
        )
    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'

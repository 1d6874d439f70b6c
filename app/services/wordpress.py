"""WordPress REST API access: request helper and payload parsing."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Tuple, TypeVar

import httpx

from app.config import SiteConfig
from app.errors import UpstreamError
from app.models.content import ContentItem, MediaRef, TermRef
from app.models.taxonomy import TaxonomyKind, TaxonomyTerm

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOTAL_ITEMS_HEADER = "X-WP-Total"
TOTAL_PAGES_HEADER = "X-WP-TotalPages"

# Related entities requested inline with every post listing
EMBED_RELATIONS = "author,wp:featuredmedia,wp:term"


def build_client(config: SiteConfig) -> httpx.AsyncClient:
    """Return an :class:`httpx.AsyncClient` configured for the content API."""
    return httpx.AsyncClient(timeout=config.timeout, follow_redirects=True)


def header_int(headers: Mapping[str, str], name: str) -> int:
    """Return the integer value of header *name*, or 0 when absent or non-numeric."""
    raw = headers.get(name)
    if raw is None:
        return 0
    try:
        return max(int(raw.strip()), 0)
    except ValueError:
        return 0


class WordPressAPI:
    """Thin wrapper issuing GET requests against ``config.wp_api_url``."""

    def __init__(self, config: SiteConfig, client: httpx.AsyncClient) -> None:
        self.config = config
        self._client = client

    def url_for(self, resource: str) -> str:
        return f"{self.config.wp_api_url}/{resource}"

    async def get_list(
        self, resource: str, params: Mapping[str, Any], parse: Callable[[Mapping[str, Any]], T]
    ) -> Tuple[List[T], httpx.Headers]:
        """GET *resource*, parse every element of its JSON array body with *parse*.

        Returns the parsed items (in server order) together with the
        response headers.

        Raises:
            UpstreamError: on a non-2xx status or when the body is not a JSON
                array of well-formed objects.
            httpx.RequestError: on transport failures (timeouts, DNS, ...).
        """
        url = self.url_for(resource)
        resp = await self._client.get(url, params=params)

        if not resp.is_success:
            logger.warning(
                "Content API error: GET %s %s -> HTTP %d", resource, dict(params), resp.status_code
            )
            raise UpstreamError(resp.status_code, url)

        try:
            body = resp.json()
            if not isinstance(body, list):
                raise TypeError(f"expected a JSON array, got {type(body).__name__}")
            items = [parse(obj) for obj in body]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed content API response for %s %s: %s", resource, dict(params), exc)
            raise UpstreamError(
                resp.status_code, url, f"Malformed response from content API for {url}"
            ) from exc

        return items, resp.headers


def _rendered(item: Mapping[str, Any], key: str) -> str:
    value = item.get(key)
    if isinstance(value, Mapping):
        return str(value.get("rendered") or "")
    return str(value or "")


def _featured_media(embedded: Mapping[str, Any]) -> Optional[MediaRef]:
    media = embedded.get("wp:featuredmedia") or []
    if not media or not isinstance(media[0], Mapping):
        return None
    source_url = media[0].get("source_url")
    # Embeds the client may not read come back as error objects without a URL
    if not source_url:
        return None
    return MediaRef(url=source_url, alt_text=media[0].get("alt_text") or "")


def _term_refs(embedded: Mapping[str, Any]) -> Tuple[TermRef, ...]:
    refs: List[TermRef] = []
    for group in embedded.get("wp:term") or []:
        for term in group or []:
            kind = TaxonomyKind.from_wp_taxonomy(term.get("taxonomy", ""))
            if kind is None:
                continue
            refs.append(
                TermRef(id=term["id"], slug=term.get("slug", ""), name=term.get("name", ""), kind=kind)
            )
    return tuple(refs)


def _author_name(embedded: Mapping[str, Any]) -> Optional[str]:
    authors = embedded.get("author") or []
    if authors and isinstance(authors[0], Mapping):
        return authors[0].get("name") or None
    return None


def _modified_at(item: Mapping[str, Any], published: Any) -> Any:
    """Prefer ``modified_gmt`` as an aware UTC datetime over the site-local ``modified``."""
    gmt = item.get("modified_gmt")
    if gmt:
        return datetime.fromisoformat(gmt).replace(tzinfo=timezone.utc)
    return item.get("modified") or published


def parse_content_item(item: Mapping[str, Any]) -> ContentItem:
    """Convert a WordPress REST post object to a :class:`ContentItem`.

    ``_embedded`` is optional; listings fetched without ``_embed`` simply
    carry no media, terms or author.
    """
    embedded = item.get("_embedded") or {}
    published = item["date"]
    return ContentItem(
        id=item["id"],
        slug=item["slug"],
        title=_rendered(item, "title"),
        body=_rendered(item, "content"),
        excerpt=_rendered(item, "excerpt"),
        published_at=published,
        modified_at=_modified_at(item, published),
        featured_media=_featured_media(embedded),
        terms=_term_refs(embedded),
        author=_author_name(embedded),
    )


def parse_taxonomy_term(item: Mapping[str, Any], kind: TaxonomyKind) -> TaxonomyTerm:
    """Convert a WordPress category/tag object to a :class:`TaxonomyTerm`."""
    return TaxonomyTerm(
        id=item["id"],
        slug=item["slug"],
        name=item.get("name", ""),
        description=item.get("description") or "",
        kind=kind,
    )

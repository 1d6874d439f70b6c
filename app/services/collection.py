"""Paginated post listings from the content API."""

import logging
from typing import Dict, NamedTuple, Optional, Union

from app.errors import NotFoundError, UpstreamError
from app.models.content import ContentItem
from app.models.content_page import ContentPage
from app.models.taxonomy import TaxonomyTerm
from app.services.wordpress import (
    EMBED_RELATIONS,
    TOTAL_ITEMS_HEADER,
    TOTAL_PAGES_HEADER,
    WordPressAPI,
    header_int,
    parse_content_item,
)

logger = logging.getLogger(__name__)


class CollectionFilter(NamedTuple):
    """Which posts a listing covers.

    Build one with :meth:`all`, :meth:`by_term` or :meth:`by_slug`.
    """

    param: Optional[str] = None
    value: Union[int, str, None] = None

    @classmethod
    def all(cls) -> "CollectionFilter":
        return cls()

    @classmethod
    def by_term(cls, term: TaxonomyTerm) -> "CollectionFilter":
        return cls(term.kind.filter_param, term.id)

    @classmethod
    def by_slug(cls, slug: str) -> "CollectionFilter":
        return cls("slug", slug)

    def as_params(self) -> Dict[str, Union[int, str]]:
        return {self.param: self.value} if self.param else {}

    def describe(self) -> str:
        return f"{self.param}={self.value}" if self.param else "all"


class CollectionResolver:
    def __init__(self, api: WordPressAPI) -> None:
        self._api = api

    async def resolve(
        self,
        filter: CollectionFilter,
        page_number: int,
        page_size: int,
        embed: bool = True,
    ) -> ContentPage[ContentItem]:
        """Fetch one page of posts matching *filter*.

        *page_number* is 1-indexed and forwarded unchanged; callers are
        responsible for never passing a non-positive value. Page counts come
        from the ``X-WP-Total`` / ``X-WP-TotalPages`` response headers and
        default to 0 when missing or malformed.

        Raises:
            UpstreamError: on a non-success response.
        """
        params: Dict[str, Union[int, str]] = {"page": page_number, "per_page": page_size}
        params.update(filter.as_params())
        if embed:
            params["_embed"] = EMBED_RELATIONS

        items, headers = await self._api.get_list("posts", params, parse_content_item)
        logger.debug(
            "Fetched %d posts (%s, page %d, per_page %d)",
            len(items),
            filter.describe(),
            page_number,
            page_size,
        )
        return ContentPage[ContentItem](
            items=items,
            page_number=page_number,
            page_size=page_size,
            total_items=header_int(headers, TOTAL_ITEMS_HEADER),
            total_pages=header_int(headers, TOTAL_PAGES_HEADER),
        )

    async def resolve_listing(
        self, filter: CollectionFilter, page_number: int, page_size: int
    ) -> ContentPage[ContentItem]:
        """Like :meth:`resolve`, for a page a visitor asked for by number.

        WordPress answers a page past the last one with HTTP 400; that is
        reported as a missing page rather than a content API failure.

        Raises:
            NotFoundError: if *page_number* is beyond the last page.
            UpstreamError: on any other non-success response.
        """
        try:
            return await self.resolve(filter, page_number, page_size)
        except UpstreamError as exc:
            if exc.status_code != 400 or page_number <= 1:
                raise
            logger.warning("Page %d of %s is past the last page", page_number, filter.describe())
            raise NotFoundError("page", str(page_number)) from exc

    async def get_by_slug(self, slug: str) -> ContentItem:
        """Return the single post whose slug is *slug*.

        Raises:
            NotFoundError: if no post has that slug.
            UpstreamError: on a non-success response.
        """
        page = await self.resolve(CollectionFilter.by_slug(slug), 1, 1)
        if not page.items:
            logger.info("No post found for slug %r", slug)
            raise NotFoundError("post", slug)
        return page.items[0]

"""Resolve a category or tag slug to its taxonomy term."""

import logging
from functools import partial

from app.errors import NotFoundError
from app.models.taxonomy import TaxonomyKind, TaxonomyTerm
from app.services.wordpress import WordPressAPI, parse_taxonomy_term

logger = logging.getLogger(__name__)


class TaxonomyResolver:
    def __init__(self, api: WordPressAPI) -> None:
        self._api = api

    async def resolve(self, kind: TaxonomyKind, slug: str) -> TaxonomyTerm:
        """Return the term of *kind* whose slug is *slug*.

        When the API returns several matches the first one is used. WordPress
        enforces slug uniqueness per taxonomy, so more than one match is
        unexpected and only logged.

        Raises:
            ValueError: if *slug* is empty.
            NotFoundError: if no term matches *slug*.
            UpstreamError: if the API answers with a non-success status.
        """
        if not slug:
            raise ValueError("A taxonomy slug is required.")

        terms, _headers = await self._api.get_list(
            kind.endpoint, {"slug": slug}, partial(parse_taxonomy_term, kind=kind)
        )
        if not terms:
            logger.info("No %s found for slug %r", kind.value, slug)
            raise NotFoundError(kind.value, slug)
        if len(terms) > 1:
            logger.warning(
                "Slug %r matched %d %s terms; using the first (id=%d)",
                slug,
                len(terms),
                kind.value,
                terms[0].id,
            )
        return terms[0]

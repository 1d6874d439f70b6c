"""Full-catalog walker: exhaustive pagination over every published post.

Two termination strategies are supported because they behave differently
when the server misreports its counts:

``WalkStrategy.SHORT_PAGE``
    Keep requesting pages until one comes back with fewer than
    ``page_size`` items.

``WalkStrategy.TOTAL_PAGES``
    Request exactly as many pages as the ``X-WP-TotalPages`` header of the
    latest response declares (a missing header ends the walk after page 1).

What happens when a page request fails is chosen separately through
:class:`WalkFailurePolicy`; :data:`DEFAULT_FAILURE_POLICY` gives each
strategy's conventional policy. Either way a walk never requests more than
``max_iterations`` pages: the next request raises :class:`RuntimeLoopError`.
"""

import logging
from enum import Enum
from typing import AsyncIterator, Dict, List, Optional

from app.errors import RuntimeLoopError, UpstreamError
from app.models.content import ContentItem
from app.services.collection import CollectionFilter, CollectionResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10_000


class WalkStrategy(str, Enum):
    SHORT_PAGE = "short_page"
    TOTAL_PAGES = "total_pages"


class WalkFailurePolicy(str, Enum):
    PARTIAL = "partial"  # log and stop; items already yielded stand
    RAISE = "raise"


DEFAULT_FAILURE_POLICY: Dict[WalkStrategy, WalkFailurePolicy] = {
    WalkStrategy.SHORT_PAGE: WalkFailurePolicy.PARTIAL,
    WalkStrategy.TOTAL_PAGES: WalkFailurePolicy.RAISE,
}


class CatalogWalker:
    def __init__(
        self, collections: CollectionResolver, max_iterations: int = DEFAULT_MAX_ITERATIONS
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1.")
        self._collections = collections
        self.max_iterations = max_iterations

    async def walk_all(
        self,
        page_size: int,
        strategy: WalkStrategy,
        on_error: Optional[WalkFailurePolicy] = None,
    ) -> AsyncIterator[ContentItem]:
        """Yield every post, page by page, in server order.

        Args:
            page_size:  Posts requested per page.
            strategy:   How the end of the catalog is detected.
            on_error:   What to do when a page request fails with
                        :class:`UpstreamError`. ``None`` selects
                        ``DEFAULT_FAILURE_POLICY[strategy]``.

        Raises:
            UpstreamError: under :attr:`WalkFailurePolicy.RAISE`.
            RuntimeLoopError: when more than ``max_iterations`` pages would be requested.
        """
        if page_size < 1:
            raise ValueError("page_size must be at least 1.")
        policy = on_error if on_error is not None else DEFAULT_FAILURE_POLICY[strategy]

        page_number = 1
        yielded = 0
        while True:
            if page_number > self.max_iterations:
                logger.error(
                    "Catalog walk (%s) exceeded %d page requests after %d posts; aborting",
                    strategy.value,
                    self.max_iterations,
                    yielded,
                )
                raise RuntimeLoopError(self.max_iterations)

            try:
                page = await self._collections.resolve(
                    CollectionFilter.all(), page_number, page_size, embed=False
                )
            except UpstreamError as exc:
                if policy is WalkFailurePolicy.RAISE:
                    logger.error(
                        "Catalog walk (%s) failed on page %d with HTTP %d",
                        strategy.value,
                        page_number,
                        exc.status_code,
                    )
                    raise
                logger.warning(
                    "Catalog walk (%s) stopped on page %d with HTTP %d; returning %d posts",
                    strategy.value,
                    page_number,
                    exc.status_code,
                    yielded,
                )
                return

            for item in page.items:
                yield item
            yielded += len(page.items)

            if strategy is WalkStrategy.SHORT_PAGE:
                done = len(page.items) < page_size
            else:
                done = page_number >= page.total_pages
            if done:
                logger.info(
                    "Catalog walk (%s) finished: %d posts in %d pages",
                    strategy.value,
                    yielded,
                    page_number,
                )
                return
            page_number += 1

    async def collect(
        self,
        page_size: int,
        strategy: WalkStrategy,
        on_error: Optional[WalkFailurePolicy] = None,
    ) -> List[ContentItem]:
        """Run :meth:`walk_all` to completion and return the posts as a list."""
        return [item async for item in self.walk_all(page_size, strategy, on_error)]

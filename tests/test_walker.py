"""Tests for CatalogWalker termination strategies, failure policies and runaway guard."""

import pytest

from app.errors import RuntimeLoopError, UpstreamError
from app.services.collection import CollectionResolver
from app.services.walker import (
    DEFAULT_FAILURE_POLICY,
    CatalogWalker,
    WalkFailurePolicy,
    WalkStrategy,
)
from wp_stub import StubWordPress, make_post, run_with_api


def _collect(stub, page_size, strategy, on_error=None, max_iterations=10_000):
    async def walk(api):
        walker = CatalogWalker(CollectionResolver(api), max_iterations=max_iterations)
        return await walker.collect(page_size, strategy, on_error)

    return run_with_api(stub, walk)


def _posts(count):
    return [make_post(i) for i in range(1, count + 1)]


class TestShortPageStrategy:
    def test_stops_after_short_page(self):
        stub = StubWordPress(posts=_posts(23))  # pages of 10, 10, 3
        items = _collect(stub, 10, WalkStrategy.SHORT_PAGE)
        assert len(items) == 23
        assert len(stub.post_requests) == 3

    def test_yields_in_server_order(self):
        stub = StubWordPress(posts=_posts(23))
        items = _collect(stub, 10, WalkStrategy.SHORT_PAGE)
        assert [i.id for i in items] == list(range(1, 24))

    def test_ignores_total_pages_header(self):
        stub = StubWordPress(posts=_posts(23))
        stub.total_pages_header = "1"
        assert len(_collect(stub, 10, WalkStrategy.SHORT_PAGE)) == 23

    def test_empty_catalog_needs_one_request(self):
        stub = StubWordPress()
        assert _collect(stub, 10, WalkStrategy.SHORT_PAGE) == []
        assert len(stub.post_requests) == 1

    def test_first_page_failure_returns_empty_without_raising(self):
        stub = StubWordPress(posts=_posts(23))
        stub.fail_pages = {1: 500}
        assert _collect(stub, 10, WalkStrategy.SHORT_PAGE) == []

    def test_mid_walk_failure_keeps_accumulated_items(self):
        stub = StubWordPress(posts=_posts(23))
        stub.fail_pages = {2: 502}
        items = _collect(stub, 10, WalkStrategy.SHORT_PAGE)
        assert [i.id for i in items] == list(range(1, 11))

    def test_exact_multiple_ends_on_out_of_range_page(self):
        # 20 posts: page 3 is rejected by WordPress with HTTP 400
        stub = StubWordPress(posts=_posts(20))
        items = _collect(stub, 10, WalkStrategy.SHORT_PAGE)
        assert len(items) == 20
        assert len(stub.post_requests) == 3

    def test_walk_does_not_request_embeds(self):
        stub = StubWordPress(posts=_posts(3))
        _collect(stub, 10, WalkStrategy.SHORT_PAGE)
        assert "_embed" not in stub.post_requests[0].url.params


class TestTotalPagesStrategy:
    def test_issues_exactly_declared_page_count(self):
        stub = StubWordPress(posts=_posts(30))  # final page is full
        items = _collect(stub, 10, WalkStrategy.TOTAL_PAGES)
        assert len(items) == 30
        assert len(stub.post_requests) == 3

    def test_short_final_page(self):
        stub = StubWordPress(posts=_posts(23))
        assert len(_collect(stub, 10, WalkStrategy.TOTAL_PAGES)) == 23
        assert len(stub.post_requests) == 3

    def test_missing_header_stops_after_first_page(self):
        stub = StubWordPress(posts=_posts(23))
        stub.total_pages_header = ""
        items = _collect(stub, 10, WalkStrategy.TOTAL_PAGES)
        assert len(items) == 10
        assert len(stub.post_requests) == 1

    def test_first_page_failure_propagates(self):
        stub = StubWordPress(posts=_posts(23))
        stub.fail_pages = {1: 500}
        with pytest.raises(UpstreamError) as exc_info:
            _collect(stub, 10, WalkStrategy.TOTAL_PAGES)
        assert exc_info.value.status_code == 500

    def test_mid_walk_failure_propagates(self):
        stub = StubWordPress(posts=_posts(30))
        stub.fail_pages = {3: 503}
        with pytest.raises(UpstreamError):
            _collect(stub, 10, WalkStrategy.TOTAL_PAGES)


class TestFailurePolicy:
    def test_defaults_per_strategy(self):
        assert DEFAULT_FAILURE_POLICY[WalkStrategy.SHORT_PAGE] is WalkFailurePolicy.PARTIAL
        assert DEFAULT_FAILURE_POLICY[WalkStrategy.TOTAL_PAGES] is WalkFailurePolicy.RAISE

    def test_short_page_can_raise(self):
        stub = StubWordPress(posts=_posts(23))
        stub.fail_pages = {2: 500}
        with pytest.raises(UpstreamError):
            _collect(stub, 10, WalkStrategy.SHORT_PAGE, on_error=WalkFailurePolicy.RAISE)

    def test_total_pages_can_return_partial(self):
        stub = StubWordPress(posts=_posts(30))
        stub.fail_pages = {3: 500}
        items = _collect(stub, 10, WalkStrategy.TOTAL_PAGES, on_error=WalkFailurePolicy.PARTIAL)
        assert len(items) == 20


class TestRunawayGuard:
    def test_always_full_server_raises_loop_error(self):
        stub = StubWordPress()
        stub.always_full = True
        with pytest.raises(RuntimeLoopError) as exc_info:
            _collect(stub, 10, WalkStrategy.SHORT_PAGE, max_iterations=25)
        assert exc_info.value.max_iterations == 25
        assert len(stub.post_requests) == 25

    def test_inflated_total_pages_raises_loop_error(self):
        stub = StubWordPress()
        stub.always_full = True
        with pytest.raises(RuntimeLoopError):
            _collect(stub, 10, WalkStrategy.TOTAL_PAGES, max_iterations=5)
        assert len(stub.post_requests) == 5

    def test_partial_policy_does_not_swallow_loop_error(self):
        stub = StubWordPress()
        stub.always_full = True
        with pytest.raises(RuntimeLoopError):
            _collect(stub, 10, WalkStrategy.SHORT_PAGE, on_error=WalkFailurePolicy.PARTIAL, max_iterations=3)

    def test_walk_finishing_at_ceiling_is_fine(self):
        stub = StubWordPress(posts=_posts(23))
        assert len(_collect(stub, 10, WalkStrategy.SHORT_PAGE, max_iterations=3)) == 23

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            CatalogWalker(collections=None, max_iterations=0)
        stub = StubWordPress()
        with pytest.raises(ValueError):
            _collect(stub, 0, WalkStrategy.SHORT_PAGE)


class TestWalkIsLazy:
    def test_consumer_can_stop_early(self):
        stub = StubWordPress(posts=_posts(50))

        async def first_three(api):
            walker = CatalogWalker(CollectionResolver(api))
            seen = []
            async for item in walker.walk_all(10, WalkStrategy.SHORT_PAGE):
                seen.append(item.id)
                if len(seen) == 3:
                    break
            return seen

        assert run_with_api(stub, first_three) == [1, 2, 3]
        assert len(stub.post_requests) == 1

    def test_each_walk_restarts_from_first_page(self):
        stub = StubWordPress(posts=_posts(15))

        async def walk_twice(api):
            walker = CatalogWalker(CollectionResolver(api))
            first = await walker.collect(10, WalkStrategy.SHORT_PAGE)
            second = await walker.collect(10, WalkStrategy.SHORT_PAGE)
            return first, second

        first, second = run_with_api(stub, walk_twice)
        assert [i.id for i in first] == [i.id for i in second]
        assert [r.url.params["page"] for r in stub.post_requests] == ["1", "2", "1", "2"]

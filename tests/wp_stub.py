"""In-memory stand-in for the WordPress REST API, served through httpx.MockTransport."""

import asyncio
import math
from typing import Any, Callable, Dict, List, Optional

import httpx

from app.config import SiteConfig
from app.services.wordpress import WordPressAPI

CONFIG = SiteConfig(
    wp_api_url="https://cms.example.com/wp-json/wp/v2",
    site_url="https://blog.example.com",
    site_name="Test Blog",
)


def make_post(post_id: int, slug: Optional[str] = None, **overrides: Any) -> dict:
    slug = slug or f"post-{post_id}"
    post = {
        "id": post_id,
        "slug": slug,
        "title": {"rendered": f"Post {post_id}"},
        "excerpt": {"rendered": f"<p>Excerpt of post {post_id}.</p>"},
        "content": {"rendered": f"<p>Body of post {post_id}.</p>"},
        "date": "2024-06-05T09:30:00",
        "modified": "2024-07-01T12:00:00",
        "categories": [],
        "tags": [],
    }
    post.update(overrides)
    return post


def make_term(term_id: int, slug: str, name: str = "", description: str = "") -> dict:
    return {"id": term_id, "slug": slug, "name": name or slug.title(), "description": description}


class StubWordPress:
    """Answers ``/posts``, ``/categories`` and ``/tags`` like WordPress does.

    Knobs for misbehaving servers:

    * ``fail_pages`` – ``{page_number: status}`` for ``/posts`` requests.
    * ``total_pages_header`` – overrides the ``X-WP-TotalPages`` value
      (``""`` omits the header entirely).
    * ``always_full`` – every ``/posts`` page is full, forever.
    """

    def __init__(
        self,
        posts: Optional[List[dict]] = None,
        categories: Optional[List[dict]] = None,
        tags: Optional[List[dict]] = None,
    ) -> None:
        self.posts = posts or []
        self.terms = {"categories": categories or [], "tags": tags or []}
        self.fail_pages: Dict[int, int] = {}
        self.total_pages_header: Optional[str] = None
        self.always_full = False
        self.requests: List[httpx.Request] = []

    @property
    def post_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/posts")]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        resource = request.url.path.rsplit("/", 1)[-1]
        params = request.url.params
        if resource == "posts":
            return self._posts(params)
        if resource in self.terms:
            matches = [t for t in self.terms[resource] if t["slug"] == params.get("slug")]
            return httpx.Response(200, json=matches)
        return httpx.Response(404, json={"code": "rest_no_route"})

    def _posts(self, params: httpx.QueryParams) -> httpx.Response:
        page = int(params.get("page", "1"))
        per_page = int(params.get("per_page", "10"))
        if page in self.fail_pages:
            return httpx.Response(self.fail_pages[page], json={"code": "error"})

        posts = self.posts
        if "slug" in params:
            posts = [p for p in posts if p["slug"] == params["slug"]]
        for field in ("categories", "tags"):
            if field in params:
                posts = [p for p in posts if int(params[field]) in p[field]]

        if self.always_full:
            chunk = [make_post((page - 1) * per_page + i + 1) for i in range(per_page)]
            total, total_pages = 10 ** 9, 10 ** 8
        else:
            total = len(posts)
            total_pages = math.ceil(total / per_page)
            if page > max(total_pages, 1):
                return httpx.Response(400, json={"code": "rest_post_invalid_page_number"})
            chunk = posts[(page - 1) * per_page : page * per_page]

        if "_embed" not in params:
            chunk = [{k: v for k, v in p.items() if k != "_embedded"} for p in chunk]

        headers = {"X-WP-Total": str(total), "X-WP-TotalPages": str(total_pages)}
        if self.total_pages_header is not None:
            headers.pop("X-WP-TotalPages")
            if self.total_pages_header:
                headers["X-WP-TotalPages"] = self.total_pages_header
        return httpx.Response(200, json=chunk, headers=headers)


def run_with_api(stub: StubWordPress, fn: Callable[[WordPressAPI], Any], config: SiteConfig = CONFIG) -> Any:
    """Run ``await fn(api)`` against *stub* on a fresh event loop."""

    async def main():
        async with stub.client() as client:
            return await fn(WordPressAPI(config, client))

    return asyncio.run(main())

"""Errors raised by the content resolvers."""

from typing import Optional


class ContentAPIError(Exception):
    """Base class for failures talking to the content API."""


class NotFoundError(ContentAPIError):
    """A slug or listing page matched nothing upstream."""

    def __init__(self, kind: str, slug: str) -> None:
        self.kind = kind
        self.slug = slug
        super().__init__(f"{kind.capitalize()} not found: {slug}")


class UpstreamError(ContentAPIError):
    """The content API answered with a non-success status or an unusable body."""

    def __init__(self, status_code: int, url: str = "", message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message or f"Content API returned HTTP {status_code} for {url}")


class RuntimeLoopError(ContentAPIError, RuntimeError):
    """A catalog walk exceeded its iteration ceiling."""

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            f"Catalog walk did not terminate within {max_iterations} page requests."
        )

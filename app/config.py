"""Environment-sourced site configuration."""

import os
from typing import Mapping, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

ALLOWED_SCHEMES = {"http", "https"}


class SiteConfig(BaseModel):
    """Settings shared by the content resolvers and the page renderers.

    Built once from the environment by :func:`load_config` and passed into
    the resolvers explicitly so tests can point them at a stub API.
    """

    wp_api_url: str = Field(description="Base URL of the WordPress REST API, e.g. https://cms/wp-json/wp/v2")
    site_url: str = Field(default="", description="Canonical site origin used for absolute URLs.")
    site_name: str = "Your Site Name"
    timeout: float = Field(default=10.0, gt=0, description="Upstream read timeout in seconds.")
    posts_per_page: int = Field(default=10, ge=1, le=100)
    sitemap_page_size: int = Field(default=100, ge=1, le=100)
    max_walk_iterations: int = Field(default=10_000, ge=1)

    @field_validator("wp_api_url")
    @classmethod
    def _check_api_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ALLOWED_SCHEMES:
            raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")
        if not parsed.hostname:
            raise ValueError("WP_API_URL must have a valid hostname.")
        return value.rstrip("/")

    @field_validator("site_url")
    @classmethod
    def _strip_site_url(cls, value: str) -> str:
        return value.rstrip("/")

    def absolute_url(self, path: str = "") -> str:
        """Return *path* prefixed with the canonical site origin."""
        return f"{self.site_url}{path}"


def load_config(environ: Optional[Mapping[str, str]] = None) -> SiteConfig:
    """Read :class:`SiteConfig` from *environ* (defaults to ``os.environ``).

    Raises:
        ValueError: if ``WP_API_URL`` is missing or any value is invalid.
    """
    env = os.environ if environ is None else environ

    api_url = env.get("WP_API_URL", "").strip()
    if not api_url:
        raise ValueError("WP_API_URL is not set.")

    values = {
        "wp_api_url": api_url,
        "site_url": env.get("NEXT_PUBLIC_SITE_URL") or env.get("SITE_URL", ""),
    }
    optional = {
        "SITE_NAME": "site_name",
        "WP_API_TIMEOUT": "timeout",
        "POSTS_PER_PAGE": "posts_per_page",
        "SITEMAP_PAGE_SIZE": "sitemap_page_size",
        "WALK_MAX_ITERATIONS": "max_walk_iterations",
    }
    for env_name, field in optional.items():
        if env.get(env_name):
            values[field] = env[env_name]

    # pydantic's ValidationError is a ValueError subclass
    return SiteConfig(**values)

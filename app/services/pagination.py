"""Pagination arithmetic for listing pages."""

from typing import NamedTuple, Optional, Union


def parse_page_number(raw: Union[str, int, None]) -> int:
    """Return the 1-indexed page requested by a ``?page=`` value.

    Anything missing, non-numeric or below 1 means the first page.
    """
    try:
        number = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return number if number >= 1 else 1


class PageLinks(NamedTuple):
    current: int
    total: int
    previous_url: Optional[str]
    next_url: Optional[str]

    @property
    def label(self) -> str:
        return f"Page {self.current} of {self.total}"


def page_links(base_url: str, current: int, total: int) -> PageLinks:
    """Build Previous / Next links around *current* for a listing at *base_url*."""
    previous_url = f"{base_url}?page={current - 1}" if current > 1 else None
    next_url = f"{base_url}?page={current + 1}" if current < total else None
    return PageLinks(current, total, previous_url, next_url)

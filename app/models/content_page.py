from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ContentPage(BaseModel, Generic[T]):
    """One page of a paginated collection.

    ``total_items`` and ``total_pages`` are whatever the server declared in
    its response headers; they are never recomputed from ``items``.
    """

    model_config = ConfigDict(frozen=True)

    items: List[T]
    page_number: int
    page_size: int
    total_items: int = 0
    total_pages: int = 0

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.models.taxonomy import TaxonomyKind


class MediaRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    alt_text: str = ""


class TermRef(BaseModel):
    """A taxonomy term embedded in a post (``_embedded["wp:term"]``)."""

    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    name: str
    kind: TaxonomyKind


class ContentItem(BaseModel):
    """Read-only projection of one WordPress post."""

    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    title: str  # HTML
    body: str  # HTML
    excerpt: str  # HTML
    published_at: datetime
    modified_at: datetime
    featured_media: Optional[MediaRef] = None
    terms: Tuple[TermRef, ...] = ()
    author: Optional[str] = None

    @property
    def categories(self) -> Tuple[TermRef, ...]:
        return tuple(t for t in self.terms if t.kind is TaxonomyKind.CATEGORY)

    @property
    def tags(self) -> Tuple[TermRef, ...]:
        return tuple(t for t in self.terms if t.kind is TaxonomyKind.TAG)

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TaxonomyKind(str, Enum):
    """The two WordPress taxonomies the frontend filters by."""

    CATEGORY = "category"
    TAG = "tag"

    @property
    def endpoint(self) -> str:
        """REST collection that lists terms of this kind."""
        return "categories" if self is TaxonomyKind.CATEGORY else "tags"

    @property
    def filter_param(self) -> str:
        """Query parameter used to filter ``/posts`` by a term id."""
        return self.endpoint

    @property
    def wp_taxonomy(self) -> str:
        """Taxonomy name as it appears in embedded ``wp:term`` objects."""
        return "category" if self is TaxonomyKind.CATEGORY else "post_tag"

    @classmethod
    def from_wp_taxonomy(cls, name: str) -> "TaxonomyKind | None":
        for kind in cls:
            if kind.wp_taxonomy == name:
                return kind
        return None


class TaxonomyTerm(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    name: str
    description: str = ""  # HTML
    kind: TaxonomyKind

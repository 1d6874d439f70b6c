from typing import List, Tuple

from pydantic import BaseModel


class MapPoint(BaseModel):
    id: int
    title: str
    lat: float
    lng: float
    post_slug: str
    post_title: str
    post_excerpt: str


class MapView(BaseModel):
    points: List[MapPoint]
    center: Tuple[float, float]
    zoom: int

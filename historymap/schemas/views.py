"""Display-ready payloads for the front-end pages."""
from pydantic import Field
from typing import Any, Dict, List, Optional, Tuple

from historymap.schemas.base import CamelModel
from historymap.schemas.point import ChildPoint, NormalizedPoint


class MarkerCategory(CamelModel):
    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class MarkerView(CamelModel):
    """Everything the renderer needs to paint a marker and its popup."""
    id: str
    name: str
    lat: float
    lon: float
    image_url: Optional[str] = None
    category: Optional[MarkerCategory] = None
    neighborhood: Optional[str] = None
    address: Optional[str] = None


class MarkerGroupView(CamelModel):
    key: str
    lat: float
    lon: float
    size: int
    is_cluster: bool
    members: List[MarkerView]


class IconSpec(CamelModel):
    icon_url: str
    icon_retina_url: str
    shadow_url: Optional[str] = None
    icon_size: Optional[Tuple[int, int]] = None
    icon_anchor: Optional[Tuple[int, int]] = None
    popup_anchor: Optional[Tuple[int, int]] = None


class MarkerIconSet(CamelModel):
    default: IconSpec
    pin: IconSpec


class HomeView(CamelModel):
    center: Tuple[float, float]
    zoom: int
    markers: List[MarkerView]
    recent: List[MarkerView]
    icons: MarkerIconSet


class MapView(CamelModel):
    center: Tuple[float, float]
    zoom: int
    total: int
    groups: List[MarkerGroupView]
    icons: MarkerIconSet


class CategoryOption(CamelModel):
    id: str
    name: str


class PointListView(CamelModel):
    total: int
    shown: int
    points: List[NormalizedPoint]
    categories: List[CategoryOption]
    neighborhoods: List[str]


class PointDetailView(CamelModel):
    point: NormalizedPoint
    category_name: str = ""
    preview_url: Optional[str] = None
    gallery: List[str] = Field(default_factory=list)
    children: List[ChildPoint] = Field(default_factory=list)
    zoom: int
    icons: MarkerIconSet


class PointFormOptions(CamelModel):
    categories: List[CategoryOption]
    neighborhoods: List[str]


class PointCreated(CamelModel):
    object_id: Optional[str] = None
    redirect: str
    images_uploaded: Optional[bool] = None
    warning: Optional[str] = None
    point: Optional[Dict[str, Any]] = None

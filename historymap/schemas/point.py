"""
Point of interest models.

``NormalizedPoint`` is the strict internal form of a backend record: it only
validates when both coordinates parse to finite numbers. Construction goes
through ``historymap.services.points.normalize.validate_point``, which turns
validation failures into a result instead of an exception.
"""

from pydantic import ConfigDict, Field, field_validator
from typing import Any, List, Optional

from historymap.schemas.base import CamelModel
from historymap.services.points.coordinates import parse_coordinate


def _optional_text(v: Any) -> Optional[str]:
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


def _photo_list(v: Any) -> Optional[List[Any]]:
    if isinstance(v, (list, tuple)):
        return list(v)
    return None


class Category(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


def _category(v: Any) -> Any:
    # One backend variant sends the type as a bare name
    if isinstance(v, str):
        return {"id": v, "name": v} if v.strip() else None
    if isinstance(v, (dict, Category)) or v is None:
        return v
    return None


class NormalizedPoint(CamelModel):
    object_id: str
    name: str
    description: Optional[str] = None
    lat: float
    lon: float
    category: Optional[Category] = Field(default=None, alias="type")
    neighborhood: Optional[str] = None
    address: Optional[str] = None
    country: Optional[str] = None
    contact: Optional[str] = None
    photo_urls: Optional[List[Any]] = None
    photo_ids: Optional[List[Any]] = None
    parent_id: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def coerce_coordinate(cls, v):
        value = parse_coordinate(v)
        if value is None:
            raise ValueError(f"not a finite coordinate: {v!r}")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v):
        return _category(v)

    @field_validator("description", "neighborhood", "address", "country", "contact", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _optional_text(v)

    @field_validator("parent_id", mode="before")
    @classmethod
    def coerce_parent(cls, v):
        if isinstance(v, dict):
            v = v.get("objectId") or v.get("id")
        return _optional_text(v)

    @field_validator("photo_urls", "photo_ids", mode="before")
    @classmethod
    def coerce_photos(cls, v):
        return _photo_list(v)

    @property
    def category_id(self) -> Optional[str]:
        return self.category.id if self.category else None

    @property
    def category_name(self) -> str:
        if not self.category:
            return ""
        return self.category.name or ""

    def to_raw(self) -> dict:
        """Dump back to the backend's field names."""
        return self.model_dump(by_alias=True)


class ChildPoint(CamelModel):
    """Lightweight sub-point listed under a parent landmark."""

    object_id: str
    name: str
    description: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    category: Optional[Category] = Field(default=None, alias="type")
    photo_urls: Optional[List[Any]] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def coerce_coordinate(cls, v):
        return parse_coordinate(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v):
        return _category(v)

    @field_validator("description", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _optional_text(v)

    @field_validator("photo_urls", mode="before")
    @classmethod
    def coerce_photos(cls, v):
        return _photo_list(v)

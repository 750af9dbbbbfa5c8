"""Conversion of normalized points into the renderer's marker contract."""
from typing import Iterable, List

from historymap.schemas.point import NormalizedPoint
from historymap.schemas.views import MarkerCategory, MarkerGroupView, MarkerView
from historymap.services.points.grouping import MarkerGroup


def to_marker(point: NormalizedPoint) -> MarkerView:
    category = None
    if point.category:
        category = MarkerCategory(
            name=point.category.name,
            color=point.category.color,
            icon=point.category.icon,
        )
    return MarkerView(
        id=point.object_id,
        name=point.name,
        lat=point.lat,
        lon=point.lon,
        image_url=point.image_url,
        category=category,
        neighborhood=point.neighborhood,
        address=point.address,
    )


def to_markers(points: Iterable[NormalizedPoint]) -> List[MarkerView]:
    return [to_marker(p) for p in points]


def to_group_view(group: MarkerGroup) -> MarkerGroupView:
    return MarkerGroupView(
        key=group.key,
        lat=group.lat,
        lon=group.lon,
        size=group.size,
        is_cluster=group.is_cluster,
        members=to_markers(group.members),
    )

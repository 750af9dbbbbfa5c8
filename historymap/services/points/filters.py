"""List-view filtering and the facets that feed the filter controls."""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from historymap.schemas.point import NormalizedPoint


@dataclass(frozen=True)
class PointFilter:
    """Empty criteria impose no constraint; active ones are ANDed."""
    search: str = ""
    type_id: str = ""
    neighborhood: str = ""

    def matches(self, point: NormalizedPoint) -> bool:
        if self.search and self.search.lower() not in point.name.lower():
            return False
        if self.type_id and point.category_id != self.type_id:
            return False
        if self.neighborhood and point.neighborhood != self.neighborhood:
            return False
        return True


def filter_points(points: Iterable[NormalizedPoint], criteria: PointFilter) -> List[NormalizedPoint]:
    return [p for p in points if criteria.matches(p)]


def category_options(points: Iterable[NormalizedPoint]) -> List[Dict[str, str]]:
    """Distinct categories as ``{id, name}`` in first-seen order."""
    names: Dict[str, str] = {}
    for p in points:
        if p.category and p.category.id:
            names[p.category.id] = p.category.name or p.category.id
    return [{"id": category_id, "name": name} for category_id, name in names.items()]


def neighborhood_options(points: Iterable[NormalizedPoint]) -> List[str]:
    return sorted({p.neighborhood for p in points if p.neighborhood})


def map_center(points: Sequence[NormalizedPoint], default: Tuple[float, float]) -> Tuple[float, float]:
    """Mean position of the points, or ``default`` when there are none."""
    if not points:
        return default
    lat = sum(p.lat for p in points) / len(points)
    lon = sum(p.lon for p in points) / len(points)
    return (lat, lon)


def recent_points(points: Sequence[NormalizedPoint], limit: int = 6) -> List[NormalizedPoint]:
    """The last ``limit`` points; the backend lists oldest first."""
    if limit <= 0:
        return []
    return list(points[-limit:])

"""Group points that share a rounded location into one map marker."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

DEFAULT_PRECISION = 5  # ~1 m


def _rounded(value: float, precision: int) -> float:
    # Adding 0.0 folds -0.0 into 0.0 so both sides of the equator/meridian agree
    return float(f"{value:.{precision}f}") + 0.0


def group_key(lat: float, lon: float, precision: int = DEFAULT_PRECISION) -> str:
    return f"{_rounded(lat, precision):.{precision}f}|{_rounded(lon, precision):.{precision}f}"


def parse_group_key(key: str) -> Tuple[float, float]:
    lat, lon = key.split("|")
    return float(lat), float(lon)


@dataclass
class MarkerGroup:
    key: str
    lat: float
    lon: float
    members: List[Any] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_cluster(self) -> bool:
        return self.size > 1


def group_points(points: Iterable[Any], precision: int = DEFAULT_PRECISION) -> List[MarkerGroup]:
    """
    Partition points by rounded coordinates.

    Groups come out in first-encountered order and members keep arrival
    order. Group coordinates are read back from the key, not averaged.
    """
    groups: Dict[str, MarkerGroup] = {}
    for point in points:
        key = group_key(point.lat, point.lon, precision)
        group = groups.get(key)
        if group is None:
            lat, lon = parse_group_key(key)
            group = groups[key] = MarkerGroup(key=key, lat=lat, lon=lon)
        group.members.append(point)
    return list(groups.values())

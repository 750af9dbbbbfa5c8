"""Validation boundary between untyped backend records and NormalizedPoint."""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from historymap.schemas.point import ChildPoint, NormalizedPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointValidation:
    """Outcome of validating one raw record."""
    point: Optional[NormalizedPoint] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.point is not None


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "record"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


def validate_point(raw: Any) -> PointValidation:
    """Validate one record. Never raises; failures carry a reason."""
    if isinstance(raw, NormalizedPoint):
        return PointValidation(point=raw)
    if not isinstance(raw, dict):
        return PointValidation(reason=f"expected an object, got {type(raw).__name__}")
    try:
        return PointValidation(point=NormalizedPoint.model_validate(raw))
    except ValidationError as exc:
        return PointValidation(reason=_describe(exc))


def normalize_points(raws: Iterable[Any]) -> List[NormalizedPoint]:
    """
    Normalize a raw collection, keeping arrival order.

    Records whose coordinates do not parse to finite numbers (or that lack
    an id or name) are left out. Applying this to its own output returns an
    equal collection.
    """
    points = []
    dropped = 0
    for raw in raws or []:
        result = validate_point(raw)
        if result.ok:
            points.append(result.point)
        else:
            dropped += 1
            object_id = raw.get("objectId") if isinstance(raw, dict) else None
            logger.debug(f"Dropping point {object_id!r}: {result.reason}")
    if dropped:
        logger.info(f"Normalized {len(points)} points, dropped {dropped} invalid records")
    return points


def normalize_children(raws: Iterable[Any]) -> List[ChildPoint]:
    """Sub-points only need an id and a name; coordinates are optional."""
    children = []
    for raw in raws or []:
        if not isinstance(raw, dict):
            continue
        try:
            children.append(ChildPoint.model_validate(raw))
        except ValidationError as exc:
            logger.debug(f"Dropping child point {raw.get('objectId')!r}: {_describe(exc)}")
    return children

"""
Point service: fetches raw records from the backend and runs them through
the point pipeline to build the data behind each front-end page.
"""

import logging
from typing import Any, List, Optional, Sequence

from historymap.config.settings import MapSettings
from historymap.core.exceptions import (
    BackendError,
    HistoryMapException,
    InvalidPointRecordError,
)
from historymap.schemas.point import NormalizedPoint
from historymap.schemas.views import (
    CategoryOption,
    HomeView,
    MapView,
    MarkerIconSet,
    PointCreated,
    PointDetailView,
    PointFormOptions,
    PointListView,
)
from historymap.services.backend_client import BackendClient, FilePart
from historymap.services.points.filters import (
    PointFilter,
    category_options,
    filter_points,
    map_center,
    neighborhood_options,
    recent_points,
)
from historymap.services.points.form import PointForm
from historymap.services.points.grouping import MarkerGroup, group_key, group_points
from historymap.services.points.images import ImageResolver
from historymap.services.points.markers import to_group_view, to_markers
from historymap.services.points.normalize import (
    normalize_children,
    normalize_points,
    validate_point,
)

logger = logging.getLogger(__name__)


class PointService:
    def __init__(self, backend: BackendClient, map_settings: MapSettings, icons: MarkerIconSet):
        self.backend = backend
        self.map = map_settings
        self.icons = icons
        self.images = ImageResolver(
            proxy_base=map_settings.file_proxy_prefix,
            source_order=map_settings.photo_source_order,
        )

    async def load_points(self) -> List[NormalizedPoint]:
        """Fetch all points and return them normalized, with preview images."""
        raw = await self.backend.list_points()
        points = normalize_points(raw)
        return self.images.attach_preview(points)

    async def home_view(self) -> HomeView:
        points = await self.load_points()
        return HomeView(
            center=self.map.default_center,
            zoom=self.map.default_zoom,
            markers=to_markers(points),
            recent=to_markers(recent_points(points, self.map.recent_limit)),
            icons=self.icons,
        )

    async def map_view(self, grouped: bool = True) -> MapView:
        points = await self.load_points()
        if grouped:
            groups = group_points(points, self.map.group_precision)
        else:
            # single-member groups keep each point at its own position
            groups = [
                MarkerGroup(key=group_key(p.lat, p.lon, self.map.group_precision), lat=p.lat, lon=p.lon, members=[p])
                for p in points
            ]
        return MapView(
            center=map_center(points, self.map.default_center),
            zoom=self.map.default_zoom,
            total=len(points),
            groups=[to_group_view(g) for g in groups],
            icons=self.icons,
        )

    async def list_view(self, criteria: PointFilter) -> PointListView:
        points = await self.load_points()
        shown = filter_points(points, criteria)
        return PointListView(
            total=len(points),
            shown=len(shown),
            points=shown,
            categories=[CategoryOption(**c) for c in category_options(points)],
            neighborhoods=neighborhood_options(points),
        )

    async def detail_view(self, point_id: str) -> PointDetailView:
        raw = await self.backend.get_point(point_id)
        if raw is None:
            raise BackendError(404, "Point not found")

        result = validate_point(raw)
        if not result.ok:
            raise InvalidPointRecordError(point_id, result.reason)

        point = result.point
        preview = self.images.preview(point)
        children = raw.get("children") if isinstance(raw, dict) else None
        return PointDetailView(
            point=point.model_copy(update={"image_url": preview}),
            category_name=point.category_name,
            preview_url=preview,
            gallery=self.images.gallery(point),
            children=normalize_children(children),
            zoom=self.map.detail_zoom,
            icons=self.icons,
        )

    async def children(self, parent_id: str):
        return normalize_children(await self.backend.list_children(parent_id))

    async def form_options(self) -> PointFormOptions:
        types = await self.backend.list_types()
        points = normalize_points(await self.backend.list_points())
        categories = []
        for t in types:
            if isinstance(t, dict) and t.get("id") is not None:
                categories.append(CategoryOption(id=str(t["id"]), name=str(t.get("name") or t["id"])))
        return PointFormOptions(categories=categories, neighborhoods=neighborhood_options(points))

    async def create_point(self, form: PointForm, images: Optional[Sequence[FilePart]] = None) -> PointCreated:
        """
        Submit the creation form, then upload any attached images.

        The point is never rolled back: an image upload failure after a
        successful creation is reported as a warning on the result.
        """
        payload = form.to_payload()

        try:
            created = await self.backend.create_point(payload)
        except BackendError as e:
            raise BackendError(
                e.status_code,
                e.backend_message or f"Failed to save point (HTTP {e.status_code})",
            ) from e

        object_id = None
        if isinstance(created, dict) and created.get("objectId"):
            object_id = str(created["objectId"])
        logger.info(f"Point created: {object_id or '<no id returned>'}")

        result = PointCreated(
            object_id=object_id,
            redirect=f"/pontos/{object_id}" if object_id else "/pontos",
            point=created if isinstance(created, dict) else None,
        )

        if not images:
            return result

        if not object_id:
            return result.model_copy(update={
                "images_uploaded": False,
                "warning": "Point saved, but images were not uploaded because no point id was returned.",
            })

        try:
            await self.backend.upload_images(images, fields={"interestPointId": object_id})
        except HistoryMapException as e:
            logger.warning(f"Image upload failed for point {object_id}: {e.message}")
            return result.model_copy(update={
                "images_uploaded": False,
                "warning": f"Point saved, but the images could not be uploaded: {e.message}",
            })

        return result.model_copy(update={"images_uploaded": True})

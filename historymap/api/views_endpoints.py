"""
Page data endpoints.

Each endpoint fetches the raw records once, runs the point pipeline and
returns exactly what the corresponding page renders. Backend failures are
terminal for the request and surface as a page-level error.
"""
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from typing import List, Optional

from historymap.core.dependencies import get_point_service
from historymap.schemas.point import ChildPoint
from historymap.schemas.views import (
    HomeView,
    MapView,
    PointCreated,
    PointDetailView,
    PointFormOptions,
    PointListView,
)
from historymap.services.point_service import PointService
from historymap.services.points.filters import PointFilter
from historymap.services.points.form import PointForm

router = APIRouter(prefix="/views", tags=["views"])


@router.get("/home", response_model=HomeView)
async def home(service: PointService = Depends(get_point_service)):
    return await service.home_view()


@router.get("/map", response_model=MapView)
async def map_page(
    grouped: bool = Query(True, description="Merge points sharing a rounded location"),
    service: PointService = Depends(get_point_service),
):
    return await service.map_view(grouped=grouped)


@router.get("/points", response_model=PointListView)
async def list_page(
    search: str = Query(""),
    type_id: str = Query("", alias="typeId"),
    neighborhood: str = Query(""),
    service: PointService = Depends(get_point_service),
):
    criteria = PointFilter(search=search, type_id=type_id, neighborhood=neighborhood)
    return await service.list_view(criteria)


@router.get("/points/new", response_model=PointFormOptions)
async def new_point_form(service: PointService = Depends(get_point_service)):
    return await service.form_options()


@router.post("/points", response_model=PointCreated)
async def submit_point(
    name: str = Form(""),
    lat: str = Form(""),
    lon: str = Form(""),
    description: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    neighborhood: Optional[str] = Form(None),
    type_id: Optional[str] = Form(None, alias="typeId"),
    parent_id: Optional[str] = Form(None, alias="parentId"),
    images: Optional[List[UploadFile]] = File(None),
    service: PointService = Depends(get_point_service),
):
    form = PointForm.parse(
        name=name,
        lat=lat,
        lon=lon,
        description=description,
        address=address,
        neighborhood=neighborhood,
        type_id=type_id,
        parent_id=parent_id,
    )
    parts = []
    for image in images or []:
        content = await image.read()
        if not content:
            continue
        parts.append(("files", (image.filename or "image", content, image.content_type or "application/octet-stream")))
    return await service.create_point(form, parts)


@router.get("/points/{point_id}", response_model=PointDetailView)
async def detail_page(point_id: str, service: PointService = Depends(get_point_service)):
    return await service.detail_view(point_id)


@router.get("/points/{point_id}/children", response_model=List[ChildPoint])
async def children_page(point_id: str, service: PointService = Depends(get_point_service)):
    return await service.children(point_id)

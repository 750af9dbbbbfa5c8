"""Interest point and category proxy routes."""
from fastapi import APIRouter, Body, Depends
from typing import Any, Dict

from historymap.core.dependencies import get_backend_client
from historymap.services.backend_client import BackendClient

router = APIRouter(prefix="/api", tags=["points"])


@router.get("/interest-points")
async def list_points(backend: BackendClient = Depends(get_backend_client)):
    return await backend.list_points()


@router.post("/interest-points")
async def create_point(
    payload: Dict[str, Any] = Body(...),
    backend: BackendClient = Depends(get_backend_client),
):
    return await backend.create_point(payload)


@router.get("/interest-points/parent/{parent_id}")
async def list_children(parent_id: str, backend: BackendClient = Depends(get_backend_client)):
    return await backend.list_children(parent_id)


@router.get("/interest-points/{point_id}")
async def get_point(point_id: str, backend: BackendClient = Depends(get_backend_client)):
    return await backend.get_point(point_id)


@router.put("/interest-points/{point_id}")
async def update_point(
    point_id: str,
    payload: Dict[str, Any] = Body(...),
    backend: BackendClient = Depends(get_backend_client),
):
    return await backend.update_point(point_id, payload)


@router.delete("/interest-points/{point_id}")
async def delete_point(point_id: str, backend: BackendClient = Depends(get_backend_client)):
    return await backend.delete_point(point_id)


@router.get("/types")
async def list_types(backend: BackendClient = Depends(get_backend_client)):
    return await backend.list_types()

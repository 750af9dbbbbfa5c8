"""Authentication proxy: login, registration and current user, forwarded to the backend."""

import logging
from fastapi import APIRouter, Depends, Header, HTTPException
from typing import Optional

from historymap.core.dependencies import get_backend_client
from historymap.core.exceptions import (
    BackendError,
    ErrorCode,
    HistoryMapException,
    InvalidCredentialsError,
    RegistrationConflictError,
    UnauthorizedError,
)
from historymap.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from historymap.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth", response_model=LoginResponse)
async def login(payload: LoginRequest, backend: BackendClient = Depends(get_backend_client)):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        data = await backend.login(payload.email, payload.password)
    except BackendError as e:
        logger.info(f"Login rejected for {payload.email}: HTTP {e.status_code}")
        raise InvalidCredentialsError() from e

    token = data.get("token") or data.get("accessToken") or data.get("jwt")
    return LoginResponse(token=token, user=data.get("user") or {"email": payload.email})


@router.post("/auth/register", response_model=RegisterResponse)
async def register(payload: RegisterRequest, backend: BackendClient = Depends(get_backend_client)):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    body = payload.model_dump(exclude_none=True)
    try:
        data = await backend.register(body)
    except BackendError as e:
        if e.status_code == 409:
            raise RegistrationConflictError(payload.email) from e
        logger.warning(f"Registration failed: {e.message}")
        raise HistoryMapException(
            "Registration failed",
            ErrorCode.BACKEND_ERROR,
            details={"backend_status": e.status_code},
            status_code=e.status_code,
        ) from e

    token = data.get("token") if isinstance(data, dict) else None
    return RegisterResponse(token=token, user=data)


@router.get("/users/me")
async def current_user(
    authorization: Optional[str] = Header(default=None),
    backend: BackendClient = Depends(get_backend_client),
):
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("No authorization token provided", ErrorCode.MISSING_TOKEN)

    token = authorization[len("Bearer "):].strip()
    try:
        return await backend.current_user(token)
    except BackendError as e:
        raise UnauthorizedError() from e

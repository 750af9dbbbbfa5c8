from pydantic import BaseModel
from typing import Any, Dict, Optional


class LoginRequest(BaseModel):
    # Presence is checked by the endpoint so a missing field answers 400
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    surname: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = True
    token: Optional[str] = None
    user: Dict[str, Any]


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "User created successfully"
    token: Optional[str] = None
    user: Any = None

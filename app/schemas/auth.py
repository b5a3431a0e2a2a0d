from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserInfo(BaseModel):
    username: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: UserInfo
    message: str = "Login successful"
    expiresIn: str


class CurrentUser(BaseModel):
    """Claims carried by a verified bearer token."""

    username: str
    id: Optional[str] = None
    role: str = "admin"

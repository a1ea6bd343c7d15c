"""Pydantic schemas for registration and login.

Learn: UserRead has no password field at all, so a stored hash can
never be serialized into a response, whatever the route returns.
"""

from pydantic import BaseModel


class UserCreate(BaseModel):
    email: str
    password: str
    password_confirmation: str


class UserRead(BaseModel):
    id: int
    email: str

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str

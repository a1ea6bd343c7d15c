"""FastAPI providers for app-scoped objects and per-request services.

Learn: create_app() stores the PasswordHasher and TokenService on
app.state; these providers hand them to routes. Tests override the
service providers with in-memory fakes via app.dependency_overrides.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_api.auth.jwt import TokenService
from playlist_api.auth.password import PasswordHasher
from playlist_api.db.engine import get_db
from playlist_api.services.playlist_service import PlaylistService
from playlist_api.services.user_service import UserService


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_playlist_service(db: AsyncSession = Depends(get_db)) -> PlaylistService:
    return PlaylistService(db)

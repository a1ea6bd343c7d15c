"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter, so a new playlist route can't be added
without it. Health, registration and login are open.
"""

from fastapi import APIRouter, Depends

from playlist_api.api.health import router as health_router
from playlist_api.api.playlists import router as playlists_router
from playlist_api.api.tokens import router as tokens_router
from playlist_api.api.users import router as users_router
from playlist_api.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter()

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(tokens_router, tags=["auth"])

# Protected routes — require a valid bearer token
api_router.include_router(playlists_router, tags=["playlists"], dependencies=_auth)

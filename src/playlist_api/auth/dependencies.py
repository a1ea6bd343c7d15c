"""FastAPI auth dependencies.

Learn: get_current_user is used as Depends() on every protected route.
It turns the request's Authorization header into a loaded User:

    no header / not "Bearer <token>"   → 401 {"error": "Unauthorized"}
    token fails verification            → 400 {"error": "Error <Kind>: ..."}
    token OK but user no longer exists  → 401 {"error": "User does not exist"}
    user found                          → request.state.user = user

A failing user lookup (database down, etc.) is not caught here: it
reaches the generic 500 handler. Routes scope every playlist query by
the returned user's id and trust nothing else in the request.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, Request

from playlist_api.auth.jwt import TokenError, TokenService
from playlist_api.db.models import User
from playlist_api.dependencies import get_token_service, get_user_service
from playlist_api.errors import TokenInvalid, Unauthorized, UserNotFound
from playlist_api.services.user_service import UserService

logger = structlog.get_logger()


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from "Bearer <token>", or None if the header doesn't fit."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    users: UserService = Depends(get_user_service),
) -> User:
    """Resolve the bearer token to a User, or halt the request."""
    token = bearer_token(authorization)
    if token is None:
        raise Unauthorized()

    try:
        claims = tokens.verify(token)
    except TokenError as e:
        logger.info("auth.token_rejected", kind=e.kind)
        raise TokenInvalid(e.kind, e.message)

    user_id = claims["userId"]
    user = await users.get_by_id(user_id)
    if user is None:
        logger.info("auth.stale_token", user_id=user_id)
        raise UserNotFound()

    request.state.user = user
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user

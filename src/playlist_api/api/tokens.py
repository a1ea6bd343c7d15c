"""Login — email/password in, bearer token out."""

import structlog
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from playlist_api.auth.jwt import TokenService
from playlist_api.auth.password import PasswordHasher
from playlist_api.dependencies import (
    get_password_hasher,
    get_token_service,
    get_user_service,
)
from playlist_api.errors import Unauthorized
from playlist_api.schemas.user import LoginRequest, TokenResponse
from playlist_api.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter()


@router.post("/tokens", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    users: UserService = Depends(get_user_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange email + password for a token valid for two hours.

    Unknown email and wrong password give the same 401, and both pay
    the full bcrypt cost.
    """
    user = await users.get_by_email(body.email)
    if user is None:
        await run_in_threadpool(hasher.verify_dummy, body.password)
        ok = False
    else:
        ok = await run_in_threadpool(hasher.verify, body.password, user.password)

    if not ok:
        logger.info("auth.login_failed")
        raise Unauthorized()

    logger.info("auth.login", user_id=user.id)
    return TokenResponse(token=tokens.issue_for_user(user.id))

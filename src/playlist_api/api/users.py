"""User registration.

Learn: POST /users creates an account and answers with {id, email}.
The password is hashed before it reaches the service layer; neither
the plaintext nor the hash is ever echoed back.
"""

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from playlist_api.auth.password import PasswordHasher
from playlist_api.dependencies import get_password_hasher, get_user_service
from playlist_api.errors import Conflict, ValidationFailure
from playlist_api.schemas.user import UserCreate, UserRead
from playlist_api.services.user_service import EmailTaken, UserService

router = APIRouter()


@router.post("/users", response_model=UserRead, status_code=201)
async def register(
    body: UserCreate,
    users: UserService = Depends(get_user_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Create a new user account."""
    if body.password != body.password_confirmation:
        raise ValidationFailure("Passwords need to match!")

    # bcrypt is deliberately slow; keep it off the event loop.
    password_hash = await run_in_threadpool(hasher.hash, body.password)
    try:
        user = await users.create(email=body.email, password_hash=password_hash)
    except EmailTaken:
        raise Conflict("Email already registered")
    return user

"""Application errors and their JSON rendering.

Learn: Routes and dependencies raise these instead of HTTPException.
Every one of them renders as {"error": message} with the class's
status code, so clients always find the same envelope.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


class PlaylistApiError(Exception):
    """Base class for errors that map to a client-visible response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(PlaylistApiError):
    """No credential, or a credential that is not a bearer token."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class TokenInvalid(PlaylistApiError):
    """The bearer token failed verification (signature, expiry or parse).

    Kept at 400 rather than 401 to match the observed API behavior.
    """

    status_code = 400

    def __init__(self, kind: str, detail: str):
        super().__init__(f"Error {kind}: {detail}")
        self.kind = kind


class UserNotFound(PlaylistApiError):
    """A valid token that references a user who no longer exists."""

    status_code = 401

    def __init__(self, message: str = "User does not exist"):
        super().__init__(message)


class ValidationFailure(PlaylistApiError):
    # Answered with 200; clients of the original API rely on it.
    status_code = 200


class Conflict(PlaylistApiError):
    status_code = 409


class NotFound(PlaylistApiError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class PlaylistNotFound(NotFound):
    """Target playlist of a song insert is missing or owned by someone else."""

    status_code = 422


async def app_error_handler(request: Request, exc: PlaylistApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Framework errors (unknown route, wrong method) in the same envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with the same envelope when a request body fails validation."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Request validation failed",
            "detail": [
                {"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()
            ],
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for store failures and bugs.

    The traceback goes to the log, never to the response body.
    """
    logger.exception(
        "request.unhandled_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlaylistApiError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The
token carries {"userId": ...} plus iat/exp and is signed with the
process-wide JWT secret. Nothing is stored server-side: a token is
valid as long as its signature checks out and exp is in the future.
There is no refresh token and no revocation list.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt

# Claims added by issue() and stripped again by verify().
_REGISTERED_CLAIMS = ("iat", "exp")


class TokenError(Exception):
    """Raised when token verification fails."""

    kind = "TokenError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidSignature(TokenError):
    kind = "InvalidSignature"


class Expired(TokenError):
    kind = "Expired"


class Malformed(TokenError):
    kind = "Malformed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issue and verify signed, time-limited identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 120,
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expires_minutes)
        self._clock = clock

    def issue(self, claims: dict[str, Any]) -> str:
        """Sign claims into a token that expires after the configured lifetime."""
        now = self._clock()
        payload = {**claims, "iat": now, "exp": now + self.lifetime}
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def issue_for_user(self, user_id: int) -> str:
        return self.issue({"userId": user_id})

    def verify(self, token: str) -> dict[str, Any]:
        """Verify a token and return the claims it was issued with.

        Expiry is judged against this service's clock, the same one
        issue() uses. Raises InvalidSignature, Expired or Malformed.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError:
            raise InvalidSignature("invalid signature")
        except jwt.InvalidTokenError as e:
            raise Malformed(str(e) or "token could not be parsed")

        exp = payload["exp"]
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise Malformed("exp claim must be a number")
        if self._clock().timestamp() >= exp:
            raise Expired("token has expired")

        user_id = payload.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise Malformed("token has no userId claim")

        return {k: v for k, v in payload.items() if k not in _REGISTERED_CLAIMS}

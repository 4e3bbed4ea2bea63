from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from starlette.requests import Request


class InvalidTokenError(Exception):
    """Raised when a session token is malformed, tampered with or expired."""


@dataclass(frozen=True)
class TokenPayload:
    user_id: int
    email: str


class TokenService:
    """Issues and verifies signed session tokens.

    The signing secret is handed in once at startup and never changes for the
    lifetime of the process.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(days=7)):
        if not secret:
            raise ValueError("TokenService requires a non-empty secret")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: int, email: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("token expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e)) from e

        user_id = data.get("userId")
        email = data.get("email")
        if not isinstance(user_id, int) or not isinstance(email, str):
            raise InvalidTokenError("token is missing identity claims")
        return TokenPayload(user_id=user_id, email=email)


def get_token_from_header(auth_header: Optional[str]) -> Optional[str]:
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[len("Bearer "):].strip() or None


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    """Return the bearer token from the Authorization header, else the session cookie."""
    return get_token_from_header(request.headers.get("authorization")) or request.cookies.get(cookie_name) or None

"""
Session tokens.

A session is a signed HS256 JWT carried in a cookie. Tokens are never
stored server side: a token is valid while its signature checks out and
its expiry lies in the future, so logging out only clears the cookie.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional
import logging

import jwt
from fastapi import Request, Response

logger = logging.getLogger("shortlink.auth")

ISSUER = "shortlink"
SUBJECT = "Session Token"
ALGORITHM = "HS256"

TimeFunc = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and validates session tokens.

    The clock is injected so expiry can be exercised in tests without
    sleeping.
    """

    def __init__(
        self,
        secret: str,
        time_func: TimeFunc = utc_now,
        cookie_name: str = "shortlink-session-token",
        login_duration: timedelta = timedelta(days=6, hours=12),
        cookie_secure: bool = False,
    ):
        self.secret = secret
        self.time_func = time_func
        self.cookie_name = cookie_name
        self.login_duration = login_duration
        self.cookie_secure = cookie_secure

    def generate(self, duration: Optional[timedelta] = None) -> str:
        """Sign a token valid from now for ``duration`` (login duration by default)"""
        now = self.time_func()
        claims = {
            "iss": ISSUER,
            "sub": SUBJECT,
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int((now + (duration or self.login_duration)).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def validate(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Check a token's signature and time window.

        Returns:
            The claims when the token is valid, None otherwise
        """
        try:
            # Time claims are checked below against the injected clock
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                issuer=ISSUER,
                options={
                    "require": ["exp", "iat", "nbf", "iss", "sub"],
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            logger.debug("Rejected session token: %s", e)
            return None

        now = self.time_func().timestamp()
        if claims["sub"] != SUBJECT:
            return None
        if claims["nbf"] > now or claims["exp"] <= now:
            return None
        return claims

    def validate_request(self, request: Request) -> bool:
        """True when the request carries a non-empty, valid session cookie"""
        token = request.cookies.get(self.cookie_name)
        if not token:
            return False
        return self.validate(token) is not None

    def set_cookie(self, response: Response) -> str:
        """Issue a fresh token and attach it to the response as the session cookie"""
        token = self.generate(self.login_duration)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.login_duration.total_seconds()),
            expires=self.time_func() + self.login_duration,
            path="/",
            secure=self.cookie_secure,
            httponly=True,
            samesite="strict",
        )
        return token

    def clear_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            secure=self.cookie_secure,
            httponly=True,
            samesite="strict",
        )

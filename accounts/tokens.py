"""Access and refresh token issuance on top of PyJWT."""
from __future__ import annotations

import time
from typing import Any, Dict, Optional
from uuid import uuid4

import jwt

from config.settings import Settings
from errors import AuthError

from .models import AccountRecord

ACCESS = "access"
REFRESH = "refresh"


class TokenIssuer:
    """Sign and verify the two token kinds.

    Access tokens carry ``sub`` and ``role``; refresh tokens carry ``sub``,
    a ``type`` marker and a unique ``jti`` so rotation can revoke them.
    """

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.JWT_SECRET.get_secret_value()
        self._algorithm = settings.JWT_ALGORITHM
        self.access_ttl_s = settings.ACCESS_TOKEN_TTL_MINUTES * 60
        self.refresh_ttl_s = settings.REFRESH_TOKEN_TTL_DAYS * 24 * 60 * 60

    def issue_access(self, account: AccountRecord, *, now: Optional[int] = None) -> str:
        issued = int(now if now is not None else time.time())
        claims = {
            "sub": account.account_id,
            "role": account.role,
            "type": ACCESS,
            "iat": issued,
            "exp": issued + self.access_ttl_s,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def issue_refresh(self, account: AccountRecord, *, now: Optional[int] = None) -> str:
        issued = int(now if now is not None else time.time())
        claims = {
            "sub": account.account_id,
            "type": REFRESH,
            "jti": uuid4().hex,
            "iat": issued,
            "exp": issued + self.refresh_ttl_s,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str, *, expected_type: str) -> Dict[str, Any]:
        """Verify signature, expiry and kind; any failure is an ``AuthError``."""

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise AuthError("Invalid or expired token.") from exc
        if claims.get("type") != expected_type:
            raise AuthError("Invalid or expired token.")
        if expected_type == REFRESH and not claims.get("jti"):
            raise AuthError("Invalid or expired token.")
        return claims


__all__ = ["TokenIssuer", "ACCESS", "REFRESH"]

"""Credential and session management: register, login, refresh, authorize."""
from __future__ import annotations

import logging
import re
from typing import Any, Optional

from errors import AuthError, ConflictError, ForbiddenError, NotFoundError, ValidationError
from observability import log_event

from .models import DEFAULT_ROLE, ROLES, AccountRecord, AccountView, AuthResult, Identity, TokenPair
from .passwords import PasswordHasher
from .store import AccountStore, RevokedTokenStore
from .tokens import ACCESS, REFRESH, TokenIssuer

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r".+@.+\..+")
NAME_MIN, NAME_MAX = 2, 80
PASSWORD_MIN = 6
INVALID_CREDENTIALS = "Invalid credentials."
SESSION_EXPIRED = "Invalid or expired session. Please log in again."


class AuthService:
    def __init__(
        self,
        accounts: AccountStore,
        revoked: RevokedTokenStore,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._accounts = accounts
        self._revoked = revoked
        self._hasher = hasher
        self._tokens = tokens
        self._dummy_hash: Optional[str] = None

    def register(self, name: Any, email: Any, password: Any, role: Any = None) -> AuthResult:
        clean_name = name.strip() if isinstance(name, str) else ""
        if len(clean_name) < NAME_MIN:
            raise ValidationError("Name must be at least 2 characters long.")
        if len(clean_name) > NAME_MAX:
            raise ValidationError("Name must be at most 80 characters long.")
        if not isinstance(email, str) or not EMAIL_PATTERN.search(email.strip()):
            raise ValidationError("A valid email is required.")
        if not isinstance(password, str) or len(password) < PASSWORD_MIN:
            raise ValidationError("Password must be at least 6 characters long.")

        email_lower = _normalize_email(email)
        if self._accounts.find_by_email(email_lower) is not None:
            raise ConflictError("Email is already registered.")

        account = self._accounts.create(
            name=clean_name,
            email=email_lower,
            password_hash=self._hasher.hash(password),
            role=role if role in ROLES else DEFAULT_ROLE,
        )
        log_event("auth.register", account.account_id, role=account.role)
        return AuthResult(tokens=self._issue(account), account=account.public())

    def login(self, email: Any, password: Any) -> AuthResult:
        if not isinstance(email, str) or not email.strip() or not isinstance(password, str) or not password:
            raise ValidationError("Email and password are required.")

        account = self._accounts.find_by_email(_normalize_email(email))
        if account is None:
            # keep the timing of an unknown email close to a wrong password
            self._hasher.verify(password, self._placeholder_hash())
            log_event("auth.login_failed", "-", outcome="invalid_credentials")
            raise AuthError(INVALID_CREDENTIALS)
        if not self._hasher.verify(password, account.password_hash):
            log_event("auth.login_failed", account.account_id, outcome="invalid_credentials")
            raise AuthError(INVALID_CREDENTIALS)

        log_event("auth.login", account.account_id)
        return AuthResult(tokens=self._issue(account), account=account.public())

    def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        """Rotate a refresh token; the presented one is revoked on success."""

        if not refresh_token:
            raise AuthError("Refresh token missing. Please log in again.")
        try:
            claims = self._tokens.decode(refresh_token, expected_type=REFRESH)
        except AuthError as exc:
            raise AuthError(SESSION_EXPIRED) from exc
        if self._revoked.is_revoked(claims["jti"]):
            logger.warning("Rejected reuse of rotated refresh token for account %s", claims["sub"])
            raise AuthError(SESSION_EXPIRED)

        account = self._accounts.get(str(claims["sub"]))
        if account is None:
            raise AuthError(SESSION_EXPIRED)

        self._revoked.revoke(claims["jti"], account_id=account.account_id, expires_at=claims["exp"])
        log_event("auth.refresh", account.account_id)
        return self._issue(account)

    def logout(self, refresh_token: Optional[str]) -> None:
        if not refresh_token:
            return
        try:
            claims = self._tokens.decode(refresh_token, expected_type=REFRESH)
        except AuthError:
            return
        self._revoked.revoke(claims["jti"], account_id=str(claims["sub"]), expires_at=claims["exp"])
        log_event("auth.logout", str(claims["sub"]))

    def authorize(self, authorization: Optional[str]) -> Identity:
        """Resolve an ``Authorization: Bearer`` header value to an identity."""

        if not authorization or not authorization.startswith("Bearer "):
            raise AuthError("Authentication required.")
        token = authorization[len("Bearer "):].strip()
        if not token:
            raise AuthError("Authentication required.")
        claims = self._tokens.decode(token, expected_type=ACCESS)
        return Identity(account_id=str(claims["sub"]), role=str(claims.get("role", "")))

    @staticmethod
    def require_role(identity: Identity, role: str) -> Identity:
        if identity.role != role:
            raise ForbiddenError("Forbidden.")
        return identity

    def me(self, identity: Identity) -> AccountView:
        account = self._accounts.get(identity.account_id)
        if account is None:
            raise NotFoundError("User not found.")
        return account.public()

    def _issue(self, account: AccountRecord) -> TokenPair:
        return TokenPair(
            access_token=self._tokens.issue_access(account),
            refresh_token=self._tokens.issue_refresh(account),
        )

    def _placeholder_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("placeholder-password")
        return self._dummy_hash


def _normalize_email(email: str) -> str:
    return email.strip().lower()


__all__ = ["AuthService"]

from __future__ import annotations  # Account entities and redacted views

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

Role = Literal["student", "admin"]
ROLES: tuple[str, ...] = ("student", "admin")
DEFAULT_ROLE: Role = "student"


class AccountRecord(BaseModel):  # Stored account row, includes the credential
    account_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    created_at: str

    def public(self) -> "AccountView":
        return AccountView(
            id=self.account_id,
            name=self.name,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )


class AccountView(BaseModel):  # Redacted account returned to clients
    id: str
    name: str
    email: str
    role: Role
    created_at: str


@dataclass(frozen=True)
class Identity:  # Authenticated caller derived from an access token
    account_id: str
    role: str


class TokenPair(BaseModel):  # Access token for the body, refresh token for the cookie
    access_token: str
    refresh_token: str


class AuthResult(BaseModel):  # Register/login outcome
    tokens: TokenPair
    account: AccountView


__all__ = [
    "Role",
    "ROLES",
    "DEFAULT_ROLE",
    "AccountRecord",
    "AccountView",
    "Identity",
    "TokenPair",
    "AuthResult",
]

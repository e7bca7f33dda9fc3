"""Accounts, credentials and token sessions."""
from .auth import AuthService
from .models import ROLES, AccountRecord, AccountView, AuthResult, Identity, TokenPair
from .passwords import BcryptHasher, PasswordHasher
from .store import AccountStore, RevokedTokenStore
from .tokens import TokenIssuer

__all__ = [
    "AuthService",
    "ROLES",
    "AccountRecord",
    "AccountView",
    "AuthResult",
    "Identity",
    "TokenPair",
    "BcryptHasher",
    "PasswordHasher",
    "AccountStore",
    "RevokedTokenStore",
    "TokenIssuer",
]

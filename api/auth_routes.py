"""FastAPI routes for registration, login and token sessions."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Cookie, Depends, Response
from fastapi.responses import JSONResponse

from accounts import Identity, TokenPair
from api.deps import current_identity, get_container
from api.errors import error_body
from api.schemas import AccountResp, AuthResp, LoginReq, LogoutResp, RefreshResp, RegisterReq
from errors import AuthError

REFRESH_COOKIE = "refreshToken"

router = APIRouter(prefix="/api/auth")


def _set_refresh_cookie(response: Response, tokens: TokenPair, container: Any) -> None:
    settings = container.settings
    response.set_cookie(
        REFRESH_COOKIE,
        tokens.refresh_token,
        max_age=settings.REFRESH_TOKEN_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


def _clear_refresh_cookie(response: Response, container: Any) -> None:
    response.delete_cookie(
        REFRESH_COOKIE,
        path="/",
        httponly=True,
        secure=container.settings.is_production,
        samesite="strict",
    )


@router.post("/register", response_model=AuthResp, status_code=201)
def register(req: RegisterReq, response: Response, container: Any = Depends(get_container)) -> AuthResp:
    result = container.auth.register(req.name, req.email, req.password, req.role)
    _set_refresh_cookie(response, result.tokens, container)
    return AuthResp(token=result.tokens.access_token, account=result.account)


@router.post("/login", response_model=AuthResp)
def login(req: LoginReq, response: Response, container: Any = Depends(get_container)) -> AuthResp:
    result = container.auth.login(req.email, req.password)
    _set_refresh_cookie(response, result.tokens, container)
    return AuthResp(token=result.tokens.access_token, account=result.account)


@router.post("/refresh", response_model=RefreshResp)
def refresh(
    response: Response,
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    container: Any = Depends(get_container),
) -> Any:
    try:
        tokens = container.auth.refresh(refresh_token)
    except AuthError as exc:
        failed = JSONResponse(status_code=exc.status_code, content=error_body(router.prefix, exc.message))
        _clear_refresh_cookie(failed, container)
        return failed
    _set_refresh_cookie(response, tokens, container)
    return RefreshResp(token=tokens.access_token)


@router.post("/logout", response_model=LogoutResp)
def logout(
    response: Response,
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    container: Any = Depends(get_container),
) -> LogoutResp:
    container.auth.logout(refresh_token)
    _clear_refresh_cookie(response, container)
    return LogoutResp()


@router.get("/me", response_model=AccountResp)
def me(identity: Identity = Depends(current_identity), container: Any = Depends(get_container)) -> AccountResp:
    return AccountResp(account=container.auth.me(identity))

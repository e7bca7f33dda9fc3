"""Request dependencies: service container lookup and bearer authentication."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import Depends, Header, Request

from accounts import AuthService, Identity


def get_container(request: Request) -> Any:
    """The ``AppContainer`` built by ``app_server.create_app``."""
    return request.app.state.container


def current_identity(
    authorization: Optional[str] = Header(default=None),
    container: Any = Depends(get_container),
) -> Identity:
    return container.auth.authorize(authorization)


def require_admin(identity: Identity = Depends(current_identity)) -> Identity:
    return AuthService.require_role(identity, "admin")


__all__ = ["get_container", "current_identity", "require_admin"]

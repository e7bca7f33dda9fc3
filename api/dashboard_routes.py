from __future__ import annotations  # Dashboard statistics route

from typing import Any

from fastapi import APIRouter, Depends

from accounts import Identity
from api.deps import current_identity, get_container
from dashboard import DashboardStats

router = APIRouter(prefix="/api/dashboard")


@router.get("/stats", response_model=DashboardStats)
def stats(identity: Identity = Depends(current_identity), container: Any = Depends(get_container)) -> DashboardStats:
    return container.dashboard.compute_stats(identity.account_id)

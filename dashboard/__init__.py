from __future__ import annotations  # Re-export dashboard public API

from .dashboard import DashboardService, DashboardStats, RecentActivity  # noqa: F401

__all__ = ["DashboardService", "DashboardStats", "RecentActivity"]

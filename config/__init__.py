"""Configuration package for the CampusPrep backend."""
from .llm import LlmRoute, route_from_settings
from .settings import Settings, load_settings

__all__ = [
    "LlmRoute",
    "route_from_settings",
    "Settings",
    "load_settings",
]

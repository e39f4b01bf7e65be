# src/community_leaderboard/api/endpoints/__init__.py
"""API endpoint modules."""

from .communities import router as communities_router
from .leaderboard import router as leaderboard_router
from .users import router as users_router

__all__ = [
    "communities_router",
    "leaderboard_router",
    "users_router",
]

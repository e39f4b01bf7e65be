"""HTTP API surface."""

from .endpoints import communities_router, leaderboard_router, users_router

__all__ = [
    "communities_router",
    "leaderboard_router",
    "users_router",
]

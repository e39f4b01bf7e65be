# src/community_leaderboard/models/__init__.py
"""SQLAlchemy models for the Community Leaderboard application."""

from .community import Community
from .user import ExperiencePoint, User

__all__ = [
    "Community",
    "ExperiencePoint",
    "User",
]

# src/community_leaderboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
Python attributes are snake_case; the JSON wire names are the camelCase
document field names (``_id``, ``totalExperience``, ``communityID`` ...).
"""

from .common import MessageResponse
from .community import CommunityResponse, LeaderboardEntry
from .user import ExperiencePointResponse, UserResponse, UserTotalsResponse

__all__ = [
    "MessageResponse",
    "CommunityResponse", "LeaderboardEntry",
    "ExperiencePointResponse", "UserResponse", "UserTotalsResponse",
]

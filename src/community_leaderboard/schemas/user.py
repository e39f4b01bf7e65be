"""User-related Pydantic schemas.

``passwordHash`` is deliberately absent from every schema here.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import wire_field


class ExperiencePointResponse(BaseModel):
    """A single entry of a user's experience history."""

    model_config = ConfigDict(from_attributes=True)

    points: int
    timestamp: datetime


class UserResponse(BaseModel):
    """Full user document, including experience history."""

    model_config = ConfigDict(from_attributes=True)

    id: str = wire_field("id", "_id")
    email: str
    profile_picture: str | None = wire_field("profile_picture", "profilePicture", None)
    experience_points: list[ExperiencePointResponse] = wire_field(
        "experience_points", "experiencePoints", default_factory=list
    )
    community_id: str | None = wire_field("community_id", "communityID", None)


class UserTotalsResponse(BaseModel):
    """User record with the history folded into ``totalExperience``."""

    model_config = ConfigDict(from_attributes=True)

    id: str = wire_field("id", "_id")
    email: str
    profile_picture: str | None = wire_field("profile_picture", "profilePicture", None)
    total_experience: int = wire_field("total_experience", "totalExperience", 0)
    community_id: str | None = wire_field("community_id", "communityID", None)

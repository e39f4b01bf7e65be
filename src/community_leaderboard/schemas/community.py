"""Community-related Pydantic schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .common import wire_field


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str = wire_field("id", "_id")
    name: str
    logo: str | None = None
    # ORM objects expose ids through ``member_ids``; JSON carries ``members``.
    members: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("member_ids", "members"),
    )


class LeaderboardEntry(BaseModel):
    """One ranked row of the community leaderboard."""

    model_config = ConfigDict(from_attributes=True)

    id: str = wire_field("id", "_id")
    name: str
    logo: str | None = None
    total_experience: int = wire_field("total_experience", "totalExperience")
    member_count: int = wire_field("member_count", "memberCount")
    rank: int = Field(..., ge=1, description="1-based position; not persisted")

# src/community_leaderboard/api/endpoints/communities.py
"""Community listing used by the join/leave selector."""

from __future__ import annotations

from fastapi import APIRouter

from community_leaderboard.api.dependencies import SessionDep
from community_leaderboard.models import Community
from community_leaderboard.repositories import CommunityRepository
from community_leaderboard.schemas.community import CommunityResponse

router = APIRouter(prefix="/community", tags=["communities"])


@router.get("", response_model=list[CommunityResponse])
async def list_communities(db: SessionDep) -> list[Community]:
    """List all communities."""
    return CommunityRepository(db).list_all()

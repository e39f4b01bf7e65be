# src/community_leaderboard/api/endpoints/leaderboard.py
"""Leaderboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from community_leaderboard.api.dependencies import SessionDep
from community_leaderboard.schemas.community import LeaderboardEntry
from community_leaderboard.services.leaderboard import get_leaderboard

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def read_leaderboard(db: SessionDep) -> list[LeaderboardEntry]:
    """Return communities ranked by total experience, highest first."""
    return get_leaderboard(db)

"""Ranked view over community experience totals."""
from __future__ import annotations

from sqlalchemy.orm import Session

from community_leaderboard.repositories import CommunityRepository
from community_leaderboard.schemas.community import LeaderboardEntry

__all__ = ["get_leaderboard"]


def get_leaderboard(db: Session) -> list[LeaderboardEntry]:
    """Return every community ranked by ``totalExperience``, highest first.

    ``memberCount`` is always the size of the member set rather than the
    stored counter. The sort is stable, so communities with equal totals keep
    ascending id order. Ranks are 1-based and computed on the fly.
    """
    communities = CommunityRepository(db).list_all()
    ordered = sorted(communities, key=lambda c: c.total_experience, reverse=True)
    return [
        LeaderboardEntry(
            id=community.id,
            name=community.name,
            logo=community.logo,
            total_experience=community.total_experience,
            member_count=len(community.members),
            rank=position,
        )
        for position, community in enumerate(ordered, start=1)
    ]

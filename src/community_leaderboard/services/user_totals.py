"""Read-side helpers that fold experience history into per-user totals."""
from __future__ import annotations

from sqlalchemy.orm import Session

from community_leaderboard.models import User
from community_leaderboard.repositories import UserRepository
from community_leaderboard.schemas.user import UserTotalsResponse

__all__ = ["get_user", "get_users_with_totals"]


def get_user(db: Session, user_id: str) -> User | None:
    """Return a single user with the experience history loaded."""
    return UserRepository(db).get_by_id(user_id, with_history=True)


def get_users_with_totals(db: Session) -> list[UserTotalsResponse]:
    """Return every user with ``totalExperience`` summed from their history.

    Users who have no history yet are listed with a total of 0.
    """
    return [
        UserTotalsResponse(
            id=row.id,
            email=row.email,
            profile_picture=row.profile_picture,
            total_experience=int(row.total_experience),
            community_id=row.community_id,
        )
        for row in UserRepository(db).list_with_totals()
    ]

"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from community_leaderboard.db.session import get_db
from community_leaderboard.services.membership import MembershipService

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_membership_service(db: SessionDep) -> MembershipService:
    """Build a membership service bound to the request's session."""
    return MembershipService(db)


MembershipServiceDep = Annotated[MembershipService, Depends(get_membership_service)]

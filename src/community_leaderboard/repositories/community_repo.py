"""Data access helpers for communities."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from community_leaderboard.core.ids import InvalidIdentifierError, normalize_id
from community_leaderboard.models import Community, ExperiencePoint, User

__all__ = ["CommunityRepository"]


class CommunityRepository:
    """Thin wrapper around database access for community entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, community_id: str | bytes, *, for_update: bool = False) -> Community | None:
        """Return a community by identifier, or ``None`` when absent or malformed.

        Args:
            community_id: Identifier in any accepted representation.
            for_update: Take a row lock on backends that support ``SELECT ... FOR UPDATE``.
        """
        try:
            canonical = normalize_id(community_id)
        except InvalidIdentifierError:
            return None
        stmt = select(Community).where(Community.id == canonical)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def get_by_name(self, name: str) -> Community | None:
        """Return the first community called ``name``."""
        return self.session.execute(select(Community).where(Community.name == name)).scalars().first()

    def list_all(self) -> list[Community]:
        """Return every community with its members eagerly loaded."""
        stmt = select(Community).options(selectinload(Community.members)).order_by(Community.id)
        return list(self.session.execute(stmt).scalars())

    def count_members(self, community_id: str) -> int:
        """Count users whose ``communityID`` points at the community."""
        stmt = select(func.count()).select_from(User).where(User.community_id == community_id)
        return int(self.session.execute(stmt).scalar_one())

    def sum_member_experience(self, community_id: str) -> int:
        """Sum the experience history of every current member."""
        stmt = (
            select(func.coalesce(func.sum(ExperiencePoint.points), 0))
            .join(User, User.id == ExperiencePoint.user_id)
            .where(User.community_id == community_id)
        )
        return int(self.session.execute(stmt).scalar_one())

    def add(self, *, name: str, logo: str | None = None) -> Community:
        """Insert a new, empty community."""
        community = Community(name=name, logo=logo, total_experience=0, member_count=0)
        self.session.add(community)
        self.session.flush()
        return community

    def save(self, community: Community) -> Community:
        """Stage ``community`` and flush pending changes."""
        self.session.add(community)
        self.session.flush()
        return community

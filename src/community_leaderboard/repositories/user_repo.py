"""Data access helpers for users and their experience history."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, selectinload

from community_leaderboard.core.ids import InvalidIdentifierError, normalize_id
from community_leaderboard.models import ExperiencePoint, User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: str | bytes, *, with_history: bool = False) -> User | None:
        """Return a user by identifier, or ``None`` when absent or malformed."""
        try:
            canonical = normalize_id(user_id)
        except InvalidIdentifierError:
            return None
        stmt = select(User).where(User.id == canonical)
        if with_history:
            stmt = stmt.options(selectinload(User.experience_points))
        return self.session.execute(stmt).scalars().first()

    def get_by_email(self, email: str) -> User | None:
        """Return the first user registered with ``email``."""
        return self.session.execute(select(User).where(User.email == email)).scalars().first()

    def total_experience(self, user_id: str) -> int:
        """Return the sum of points over the user's history (0 when empty)."""
        stmt = select(func.coalesce(func.sum(ExperiencePoint.points), 0)).where(
            ExperiencePoint.user_id == user_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def list_with_totals(self) -> list[Row[Any]]:
        """Return one row per user with ``total_experience`` folded in.

        Users without any history are kept and report a total of 0.
        """
        total = func.coalesce(func.sum(ExperiencePoint.points), 0).label("total_experience")
        stmt = (
            select(
                User.id,
                User.email,
                User.profile_picture,
                User.community_id,
                total,
            )
            .outerjoin(ExperiencePoint, ExperiencePoint.user_id == User.id)
            .group_by(User.id, User.email, User.profile_picture, User.community_id)
            .order_by(User.id)
        )
        return list(self.session.execute(stmt).all())

    def add(
        self,
        *,
        email: str,
        password_hash: str,
        profile_picture: str | None = None,
        history: list[tuple[int, Any]] | None = None,
    ) -> User:
        """Insert a new user with an optional ``(points, timestamp)`` history."""
        user = User(email=email, password_hash=password_hash, profile_picture=profile_picture)
        for points, timestamp in history or []:
            entry = ExperiencePoint(points=points)
            if timestamp is not None:
                entry.timestamp = timestamp
            user.experience_points.append(entry)
        self.session.add(user)
        self.session.flush()
        return user

    def save(self, user: User) -> User:
        """Stage ``user`` and flush pending changes."""
        self.session.add(user)
        self.session.flush()
        return user

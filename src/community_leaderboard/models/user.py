# src/community_leaderboard/models/user.py
"""SQLAlchemy models for users and their experience history."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from community_leaderboard.core.ids import ID_HEX_LENGTH, new_id
from community_leaderboard.db.session import Base

if TYPE_CHECKING:
    from .community import Community


class User(Base):
    """A member account; belongs to at most one community via ``communityID``."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(ID_HEX_LENGTH), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    # Never serialized; API schemas do not declare it.
    password_hash: Mapped[str] = mapped_column("passwordHash", Text, nullable=False)
    profile_picture: Mapped[str | None] = mapped_column("profilePicture", Text, nullable=True)
    community_id: Mapped[str | None] = mapped_column(
        "communityID",
        String(ID_HEX_LENGTH),
        ForeignKey("communities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    experience_points: Mapped[list[ExperiencePoint]] = relationship(
        "ExperiencePoint",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="ExperiencePoint.id",
    )
    community: Mapped[Community | None] = relationship("Community", back_populates="members")

    __mapper_args__ = {"version_id_col": version}


class ExperiencePoint(Base):
    """One entry of a user's ordered experience history."""

    __tablename__ = "experience_points"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(ID_HEX_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="experience_points")

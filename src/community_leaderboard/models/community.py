"""SQLAlchemy models for communities and their experience accumulators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from community_leaderboard.core.ids import ID_HEX_LENGTH, new_id
from community_leaderboard.db.session import Base

if TYPE_CHECKING:
    from .user import User


class Community(Base):
    """Community with incrementally maintained member and experience totals."""

    __tablename__ = "communities"

    id: Mapped[str] = mapped_column(String(ID_HEX_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_experience: Mapped[int] = mapped_column(
        "totalExperience", BigInteger, nullable=False, default=0
    )
    member_count: Mapped[int] = mapped_column("memberCount", Integer, nullable=False, default=0)
    # Bumped on every UPDATE; a mismatch raises StaleDataError at flush.
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    members: Mapped[list[User]] = relationship(
        "User",
        back_populates="community",
        order_by="User.id",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def member_ids(self) -> list[str]:
        """Identifiers of the current members."""
        return [member.id for member in self.members]

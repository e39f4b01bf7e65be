# src/community_leaderboard/services/membership.py
"""Join/leave operations that keep community accumulators in step.

A user's membership lives in one place, ``User.communityID``. Each community
also caches ``memberCount`` and ``totalExperience``; both are adjusted here
by the user's summed experience history. Every operation runs as a single
transaction: old community, then user, then new community are flushed in
that order and committed once, so a failure part way leaves nothing behind.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from community_leaderboard.core.ids import same_id
from community_leaderboard.models import Community, User
from community_leaderboard.repositories import CommunityRepository, UserRepository

logger = logging.getLogger(__name__)

JOINED_MESSAGE = "User joined the community successfully"
LEFT_MESSAGE = "User left the community successfully"

T = TypeVar("T")


class MembershipError(RuntimeError):
    """Base exception for membership operations."""


class NotFoundError(MembershipError):
    """Raised when the user or the community does not exist."""


class NotAMemberError(MembershipError):
    """Raised when leaving a community the user does not belong to."""


class StoreFailureError(MembershipError):
    """Raised when the persistence layer fails; the transaction is rolled back."""


class ConcurrentUpdateError(StoreFailureError):
    """Raised when another writer changed a row between our read and write."""


class MembershipService:
    """Move users between communities while maintaining aggregate counters."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.users = UserRepository(db)
        self.communities = CommunityRepository(db)

    def join(self, user_id: str, community_id: str) -> str:
        """Make ``user_id`` a member of ``community_id``.

        Leaves the user's previous community first when it differs. Joining
        the community the user already belongs to changes nothing.

        Returns:
            Acknowledgement message.

        Raises:
            NotFoundError: If the community or the user does not exist.
            StoreFailureError: If persisting any of the writes fails.
        """
        return self._in_transaction("join", lambda: self._join(user_id, community_id))

    def leave(self, user_id: str, community_id: str) -> str:
        """Remove ``user_id`` from ``community_id``.

        Raises:
            NotFoundError: If the community or the user does not exist.
            NotAMemberError: If the user is not in the community's member set.
            StoreFailureError: If persisting any of the writes fails.
        """
        return self._in_transaction("leave", lambda: self._leave(user_id, community_id))

    def _join(self, user_id: str, community_id: str) -> str:
        community = self._require_community(community_id)
        user = self._require_user(user_id)
        total = self.users.total_experience(user.id)
        already_member = same_id(user.community_id, community.id)

        if user.community_id is not None and not already_member:
            previous = self.communities.get_by_id(user.community_id, for_update=True)
            if previous is not None:
                self._detach(previous, user, total)
                self.communities.save(previous)

        user.community = community
        self.users.save(user)

        if not already_member:
            community.member_count += 1
            community.total_experience += total
            self.communities.save(community)

        logger.info(
            "User %s joined community %s (experience=%d, members=%d)",
            user.id,
            community.id,
            total,
            community.member_count,
        )
        return JOINED_MESSAGE

    def _leave(self, user_id: str, community_id: str) -> str:
        community = self._require_community(community_id)
        user = self._require_user(user_id)

        if not same_id(user.community_id, community.id):
            raise NotAMemberError("User is not a part of this community")

        total = self.users.total_experience(user.id)
        self._detach(community, user, total)
        self.communities.save(community)

        user.community = None
        self.users.save(user)

        logger.info(
            "User %s left community %s (experience=%d, members=%d)",
            user.id,
            community.id,
            total,
            community.member_count,
        )
        return LEFT_MESSAGE

    @staticmethod
    def _detach(community: Community, user: User, total: int) -> None:
        """Take ``user``'s contribution out of ``community``'s accumulators."""
        if community.member_count < 1:
            logger.warning(
                "Community %s has memberCount %d while user %s is a member; keeping it at 0",
                community.id,
                community.member_count,
                user.id,
            )
            community.member_count = 0
        else:
            community.member_count -= 1
        community.total_experience -= total
        logger.debug("Detached user %s from community %s", user.id, community.id)

    def _require_community(self, community_id: str) -> Community:
        community = self.communities.get_by_id(community_id, for_update=True)
        if community is None:
            raise NotFoundError("Community not found")
        return community

    def _require_user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _in_transaction(self, action: str, operation: Callable[[], T]) -> T:
        try:
            result = operation()
            self.db.commit()
        except MembershipError:
            self.db.rollback()
            raise
        except StaleDataError as exc:
            self.db.rollback()
            logger.warning("Concurrent update detected during %s: %s", action, exc)
            raise ConcurrentUpdateError(
                "Membership changed concurrently; reload and try again"
            ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Store failure during %s: %s", action, exc, exc_info=True)
            raise StoreFailureError(f"Failed to {action} community") from exc
        return result

"""Recompute cached community accumulators from membership facts."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from community_leaderboard.repositories import CommunityRepository

from .membership import StoreFailureError

logger = logging.getLogger(__name__)

__all__ = ["CommunityDrift", "reconcile_communities"]


@dataclass(frozen=True)
class CommunityDrift:
    """Stored versus recomputed accumulators for one community."""

    community_id: str
    stored_member_count: int
    actual_member_count: int
    stored_total_experience: int
    actual_total_experience: int


def reconcile_communities(db: Session, *, dry_run: bool = False) -> list[CommunityDrift]:
    """Repair ``memberCount``/``totalExperience`` wherever they drifted.

    Args:
        db: Database session.
        dry_run: Report drift without writing corrections.

    Returns:
        One entry per community whose stored values did not match.
    """
    repo = CommunityRepository(db)
    drifted: list[CommunityDrift] = []
    try:
        for community in repo.list_all():
            actual_members = repo.count_members(community.id)
            actual_total = repo.sum_member_experience(community.id)
            if (
                community.member_count == actual_members
                and community.total_experience == actual_total
            ):
                continue

            drift = CommunityDrift(
                community_id=community.id,
                stored_member_count=community.member_count,
                actual_member_count=actual_members,
                stored_total_experience=community.total_experience,
                actual_total_experience=actual_total,
            )
            drifted.append(drift)
            logger.warning("Community accumulators drifted: %s", drift)

            if not dry_run:
                community.member_count = actual_members
                community.total_experience = actual_total
                repo.save(community)

        if dry_run:
            db.rollback()
        else:
            db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Reconciliation failed: %s", exc, exc_info=True)
        raise StoreFailureError("Failed to reconcile communities") from exc

    logger.info("Reconciled %d communities", len(drifted))
    return drifted

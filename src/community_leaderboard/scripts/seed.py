"""Populate a local database with demo users and communities."""
from __future__ import annotations

import argparse
import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from community_leaderboard.core.logging_config import configure_logging
from community_leaderboard.core.security import hash_password
from community_leaderboard.db.session import SessionLocal, create_tables
from community_leaderboard.repositories import CommunityRepository, UserRepository

logger = logging.getLogger(__name__)

DEMO_COMMUNITIES = [
    ("Night Owls", "https://example.com/logos/owls.png"),
    ("Early Birds", "https://example.com/logos/birds.png"),
    ("Weekend Warriors", None),
]

DEMO_PASSWORD = "changeme"

DEMO_USERS = [
    ("ada@example.com", [120, 45, 30]),
    ("grace@example.com", [300]),
    ("linus@example.com", [10, 5]),
    ("margaret@example.com", []),
]


def seed(db: Session) -> tuple[int, int]:
    """Insert the demo rows that are missing, matching communities by name and users by email.

    Returns:
        Number of communities and users added.
    """
    communities = CommunityRepository(db)
    users = UserRepository(db)

    added_communities = 0
    for name, logo in DEMO_COMMUNITIES:
        if communities.get_by_name(name) is not None:
            continue
        communities.add(name=name, logo=logo)
        added_communities += 1

    missing_users = [(email, points) for email, points in DEMO_USERS if users.get_by_email(email) is None]
    if missing_users:
        password_hash = hash_password(DEMO_PASSWORD)
        now = datetime.now(UTC)
        for email, points in missing_users:
            history = [(value, now - timedelta(days=offset)) for offset, value in enumerate(points)]
            users.add(email=email, password_hash=password_hash, history=history)

    db.commit()
    if added_communities or missing_users:
        logger.info("Seeded %d communities and %d users", added_communities, len(missing_users))
    else:
        logger.info("Database already seeded; skipping")
    return added_communities, len(missing_users)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo users and communities")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (skip when using Alembic).",
    )
    args = parser.parse_args()

    configure_logging()
    if args.create_tables:
        create_tables()
    with SessionLocal() as db:
        seed(db)


if __name__ == "__main__":
    main()

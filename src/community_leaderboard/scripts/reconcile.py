"""Recompute community member counts and experience totals."""
from __future__ import annotations

import argparse
import sys

from community_leaderboard.core.logging_config import configure_logging
from community_leaderboard.db.session import SessionLocal
from community_leaderboard.services.membership import StoreFailureError
from community_leaderboard.services.reconcile import reconcile_communities


def main() -> None:
    parser = argparse.ArgumentParser(description="Repair drifted community accumulators")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report drift without writing corrections.",
    )
    args = parser.parse_args()

    configure_logging()
    try:
        with SessionLocal() as db:
            drifted = reconcile_communities(db, dry_run=args.dry_run)
    except StoreFailureError as exc:
        print(f"[reconcile] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    for drift in drifted:
        print(
            f"[reconcile] {drift.community_id}: "
            f"members {drift.stored_member_count} -> {drift.actual_member_count}, "
            f"experience {drift.stored_total_experience} -> {drift.actual_total_experience}"
        )
    verb = "would fix" if args.dry_run else "fixed"
    print(f"[reconcile] {verb} {len(drifted)} communities")


if __name__ == "__main__":
    main()

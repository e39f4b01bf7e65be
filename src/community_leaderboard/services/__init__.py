"""Business logic services for the Community Leaderboard application."""

from .leaderboard import get_leaderboard
from .membership import (
    ConcurrentUpdateError,
    MembershipError,
    MembershipService,
    NotAMemberError,
    NotFoundError,
    StoreFailureError,
)
from .reconcile import CommunityDrift, reconcile_communities
from .user_totals import get_user, get_users_with_totals

__all__ = [
    "MembershipService",
    "MembershipError",
    "NotFoundError",
    "NotAMemberError",
    "StoreFailureError",
    "ConcurrentUpdateError",
    "get_leaderboard",
    "get_user",
    "get_users_with_totals",
    "CommunityDrift",
    "reconcile_communities",
]

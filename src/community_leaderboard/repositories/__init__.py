"""Repositories wrapping persistence for users and communities."""

from .community_repo import CommunityRepository
from .user_repo import UserRepository

__all__ = ["CommunityRepository", "UserRepository"]

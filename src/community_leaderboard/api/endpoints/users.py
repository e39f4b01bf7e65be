# src/community_leaderboard/api/endpoints/users.py
"""User read endpoints and community join/leave mutations."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from community_leaderboard.api.dependencies import MembershipServiceDep, SessionDep
from community_leaderboard.models import User
from community_leaderboard.schemas.common import MessageResponse
from community_leaderboard.schemas.user import UserResponse, UserTotalsResponse
from community_leaderboard.services.membership import (
    ConcurrentUpdateError,
    NotAMemberError,
    NotFoundError,
)
from community_leaderboard.services.user_totals import get_user, get_users_with_totals

router = APIRouter(prefix="/user", tags=["users"])


@router.get("", response_model=list[UserTotalsResponse])
async def list_users(db: SessionDep) -> list[UserTotalsResponse]:
    """List every user with ``totalExperience`` derived from their history."""
    return get_users_with_totals(db)


@router.get("/{user_id}", response_model=UserResponse)
async def read_user(user_id: str, db: SessionDep) -> User:
    """Return a single user including the experience history."""
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.post("/{user_id}/join/{community_id}", response_model=MessageResponse)
async def join_community(
    user_id: str,
    community_id: str,
    service: MembershipServiceDep,
) -> MessageResponse:
    """Join a community, leaving the user's previous one if needed."""
    try:
        message = service.join(user_id, community_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConcurrentUpdateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return MessageResponse(message=message)


@router.delete("/{user_id}/leave/{community_id}", response_model=MessageResponse)
async def leave_community(
    user_id: str,
    community_id: str,
    service: MembershipServiceDep,
) -> MessageResponse:
    """Leave a community the user currently belongs to."""
    try:
        message = service.leave(user_id, community_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NotAMemberError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ConcurrentUpdateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return MessageResponse(message=message)

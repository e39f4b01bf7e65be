# tests/services/test_membership.py
"""Tests for the join/leave membership service."""

import logging

import pytest
from sqlalchemy import create_engine, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from community_leaderboard.db.session import Base
from community_leaderboard.models import Community, ExperiencePoint, User
from community_leaderboard.services.membership import (
    JOINED_MESSAGE,
    LEFT_MESSAGE,
    ConcurrentUpdateError,
    MembershipService,
    NotAMemberError,
    NotFoundError,
    StoreFailureError,
)

MISSING_ID = "0" * 24


@pytest.fixture()
def service(db_session) -> MembershipService:
    return MembershipService(db_session)


def test_join_empty_community(service, db_session, community, test_user) -> None:
    """Joining adds the user's summed history and one member."""
    assert service.join(test_user.id, community.id) == JOINED_MESSAGE

    db_session.refresh(community)
    db_session.refresh(test_user)
    assert test_user.community_id == community.id
    assert community.member_ids == [test_user.id]
    assert community.member_count == 1
    assert community.total_experience == 15


def test_join_accumulates_multiple_members(service, db_session, community, make_user) -> None:
    first = make_user(points=[100])
    second = make_user(points=[20, 30])

    service.join(first.id, community.id)
    service.join(second.id, community.id)

    db_session.refresh(community)
    assert community.member_count == 2
    assert community.total_experience == 150
    assert set(community.member_ids) == {first.id, second.id}


def test_join_twice_is_idempotent(service, db_session, community, test_user) -> None:
    service.join(test_user.id, community.id)
    service.join(test_user.id, community.id)

    db_session.refresh(community)
    assert community.member_count == 1
    assert community.total_experience == 15


def test_join_moves_user_between_communities(
    service, db_session, make_community, test_user
) -> None:
    old = make_community(name="Old")
    new = make_community(name="New")
    service.join(test_user.id, old.id)

    service.join(test_user.id, new.id)

    db_session.refresh(old)
    db_session.refresh(new)
    db_session.refresh(test_user)
    assert test_user.community_id == new.id
    assert test_user.id not in old.member_ids
    assert old.member_count == 0
    assert old.total_experience == 0
    assert new.member_ids == [test_user.id]
    assert new.member_count == 1
    assert new.total_experience == 15


def test_join_accepts_uppercase_ids(service, db_session, community, test_user) -> None:
    """Ids in another case still refer to the same records."""
    service.join(test_user.id.upper(), community.id.upper())
    service.join(test_user.id, community.id)

    db_session.refresh(community)
    assert community.member_count == 1


def test_join_user_without_history(service, db_session, community, make_user) -> None:
    user = make_user(points=[])
    service.join(user.id, community.id)

    db_session.refresh(community)
    assert community.member_count == 1
    assert community.total_experience == 0


@pytest.mark.parametrize("missing", ["community", "user"])
def test_join_missing_entity(service, community, test_user, missing) -> None:
    user_id = MISSING_ID if missing == "user" else test_user.id
    community_id = MISSING_ID if missing == "community" else community.id

    with pytest.raises(NotFoundError) as exc_info:
        service.join(user_id, community_id)
    assert missing.capitalize() in str(exc_info.value)


def test_join_malformed_id_is_not_found(service, community) -> None:
    with pytest.raises(NotFoundError):
        service.join("not-an-id", community.id)


def test_leave_community(service, db_session, community, test_user) -> None:
    service.join(test_user.id, community.id)

    assert service.leave(test_user.id, community.id) == LEFT_MESSAGE

    db_session.refresh(community)
    db_session.refresh(test_user)
    assert test_user.community_id is None
    assert community.member_ids == []
    assert community.member_count == 0
    assert community.total_experience == 0


def test_leave_keeps_other_members(service, db_session, community, make_user) -> None:
    staying = make_user(points=[40])
    leaving = make_user(points=[7, 3])
    service.join(staying.id, community.id)
    service.join(leaving.id, community.id)

    service.leave(leaving.id, community.id)

    db_session.refresh(community)
    assert community.member_ids == [staying.id]
    assert community.member_count == 1
    assert community.total_experience == 40


def test_leave_when_not_member_changes_nothing(
    service, db_session, make_community, test_user
) -> None:
    joined = make_community(name="Joined")
    other = make_community(name="Other")
    service.join(test_user.id, joined.id)

    with pytest.raises(NotAMemberError):
        service.leave(test_user.id, other.id)

    db_session.refresh(joined)
    db_session.refresh(other)
    db_session.refresh(test_user)
    assert test_user.community_id == joined.id
    assert joined.member_count == 1
    assert joined.total_experience == 15
    assert other.member_count == 0
    assert other.total_experience == 0


def test_leave_missing_community(service, test_user) -> None:
    with pytest.raises(NotFoundError, match="Community not found"):
        service.leave(test_user.id, MISSING_ID)


def test_store_failure_rolls_back(service, db_session, community, test_user, monkeypatch) -> None:
    def failing_commit() -> None:
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    with pytest.raises(StoreFailureError):
        service.join(test_user.id, community.id)

    monkeypatch.undo()
    db_session.refresh(community)
    db_session.refresh(test_user)
    assert community.member_count == 0
    assert community.total_experience == 0
    assert test_user.community_id is None


def test_concurrent_update_is_reported(service, db_session, community, test_user) -> None:
    """A writer that bumped the version behind our back makes the join fail."""
    db_session.execute(
        update(Community)
        .where(Community.id == community.id)
        .values(version=Community.version + 1),
        execution_options={"synchronize_session": False},
    )
    db_session.commit()

    with pytest.raises(ConcurrentUpdateError):
        service.join(test_user.id, community.id)

    db_session.refresh(community)
    assert community.member_count == 0


def test_concurrent_update_is_a_store_failure() -> None:
    assert issubclass(ConcurrentUpdateError, StoreFailureError)


def test_leave_with_drifted_member_count_logs_warning(
    service, db_session, community, test_user, caplog
) -> None:
    service.join(test_user.id, community.id)
    community.member_count = 0
    db_session.commit()

    with caplog.at_level(logging.WARNING, logger="community_leaderboard.services.membership"):
        service.leave(test_user.id, community.id)

    db_session.refresh(community)
    assert community.member_count == 0
    assert community.total_experience == 0
    assert "memberCount 0" in caplog.text


@pytest.fixture()
def file_sessionmaker(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'membership.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False)
    finally:
        engine.dispose()


def test_two_sessions_joining_same_community(file_sessionmaker) -> None:
    """The second of two writers that read the same community version is rejected."""
    with file_sessionmaker() as setup:
        target = Community(name="Contended", total_experience=0, member_count=0)
        first = User(email="first@example.com", password_hash="x")
        second = User(email="second@example.com", password_hash="x")
        first.experience_points = [ExperiencePoint(points=10)]
        second.experience_points = [ExperiencePoint(points=5)]
        setup.add_all([target, first, second])
        setup.commit()
        community_id, first_id, second_id = target.id, first.id, second.id

    with file_sessionmaker() as session_a, file_sessionmaker() as session_b:
        # Both writers have read version 1 of the community.
        session_b.get(Community, community_id)
        MembershipService(session_a).join(first_id, community_id)

        with pytest.raises(ConcurrentUpdateError):
            MembershipService(session_b).join(second_id, community_id)

    with file_sessionmaker() as check:
        stored = check.get(Community, community_id)
        assert stored.member_count == 1
        assert stored.total_experience == 10
        assert stored.member_ids == [first_id]
        assert check.get(User, second_id).community_id is None

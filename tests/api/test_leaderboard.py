"""Tests for the leaderboard and community listing endpoints."""

from fastapi import status
from sqlalchemy.exc import OperationalError

from community_leaderboard.repositories import CommunityRepository


def test_leaderboard_order_and_shape(client, make_community) -> None:
    a = make_community(name="A", total_experience=150)
    b = make_community(name="B", total_experience=300, logo="b.png")

    response = client.get("/leaderboard")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [row["_id"] for row in data] == [b.id, a.id]
    assert data[0] == {
        "_id": b.id,
        "name": "B",
        "logo": "b.png",
        "totalExperience": 300,
        "memberCount": 0,
        "rank": 1,
    }


def test_leaderboard_reflects_join(client, community, test_user) -> None:
    client.post(f"/user/{test_user.id}/join/{community.id}")

    [row] = client.get("/leaderboard").json()
    assert row["totalExperience"] == 15
    assert row["memberCount"] == 1


def test_leaderboard_store_error_is_500(client, mocker) -> None:
    mocker.patch.object(
        CommunityRepository,
        "list_all",
        side_effect=OperationalError("SELECT", {}, Exception("connection lost")),
    )

    response = client.get("/leaderboard")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Internal Server Error"}


def test_list_communities(client, community, test_user) -> None:
    client.post(f"/user/{test_user.id}/join/{community.id}")

    response = client.get("/community")
    assert response.status_code == status.HTTP_200_OK
    [row] = response.json()
    assert row["_id"] == community.id
    assert row["name"] == "Test Community"
    assert row["members"] == [test_user.id]


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}

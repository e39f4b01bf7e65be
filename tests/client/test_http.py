"""Tests for the leaderboard HTTP client."""

import httpx
import pytest

from community_leaderboard.client.http import ClientError, LeaderboardClient

USER_ID = "a" * 24
COMMUNITY_ID = "b" * 24


def _client(handler) -> LeaderboardClient:
    return LeaderboardClient("http://api.test", transport=httpx.MockTransport(handler))


def test_leaderboard_decodes_wire_names() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/leaderboard"
        return httpx.Response(
            200,
            json=[
                {
                    "_id": COMMUNITY_ID,
                    "name": "B",
                    "logo": None,
                    "totalExperience": 300,
                    "memberCount": 2,
                    "rank": 1,
                }
            ],
        )

    with _client(handler) as client:
        [entry] = client.leaderboard()

    assert entry.id == COMMUNITY_ID
    assert entry.total_experience == 300
    assert entry.member_count == 2


def test_join_and_leave_hit_expected_routes() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json={"message": "ok"})

    with _client(handler) as client:
        assert client.join(USER_ID, COMMUNITY_ID).message == "ok"
        assert client.leave(USER_ID, COMMUNITY_ID).message == "ok"

    assert seen == [
        ("POST", f"/user/{USER_ID}/join/{COMMUNITY_ID}"),
        ("DELETE", f"/user/{USER_ID}/leave/{COMMUNITY_ID}"),
    ]


def test_error_status_raises_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"detail": "User is not a part of this community"})

    with _client(handler) as client, pytest.raises(ClientError) as exc_info:
        client.leave(USER_ID, COMMUNITY_ID)

    assert exc_info.value.status_code == 400
    assert "not a part" in str(exc_info.value)


def test_transport_failure_raises_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client, pytest.raises(ClientError) as exc_info:
        client.users()

    assert exc_info.value.status_code is None


def test_user_decodes_history() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "_id": USER_ID,
                "email": "ada@example.com",
                "profilePicture": None,
                "experiencePoints": [{"points": 10, "timestamp": "2024-01-01T00:00:00Z"}],
                "communityID": COMMUNITY_ID,
            },
        )

    with _client(handler) as client:
        user = client.user(USER_ID)

    assert user.community_id == COMMUNITY_ID
    assert [p.points for p in user.experience_points] == [10]

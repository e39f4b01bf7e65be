"""HTTP client for the leaderboard API.

Used by the terminal front end; every call maps one endpoint and returns the
same Pydantic schemas the server responds with.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from community_leaderboard.core.settings import settings
from community_leaderboard.schemas import (
    CommunityResponse,
    LeaderboardEntry,
    MessageResponse,
    UserResponse,
    UserTotalsResponse,
)

logger = logging.getLogger(__name__)


class ClientError(RuntimeError):
    """Raised when the API is unreachable or answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LeaderboardClient:
    """Synchronous wrapper around the leaderboard HTTP API."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.http_timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> LeaderboardClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()

    def _request(self, method: str, path: str) -> Any:
        try:
            response = self._client.request(method, path)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ClientError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            detail = _error_detail(response)
            logger.debug("%s %s -> %d %s", method, path, response.status_code, detail)
            raise ClientError(detail, status_code=response.status_code)
        return response.json()

    def leaderboard(self) -> list[LeaderboardEntry]:
        """Fetch the ranked community list."""
        return [LeaderboardEntry.model_validate(row) for row in self._request("GET", "/leaderboard")]

    def communities(self) -> list[CommunityResponse]:
        """Fetch all communities."""
        return [CommunityResponse.model_validate(row) for row in self._request("GET", "/community")]

    def users(self) -> list[UserTotalsResponse]:
        """Fetch all users with their experience totals."""
        return [UserTotalsResponse.model_validate(row) for row in self._request("GET", "/user")]

    def user(self, user_id: str) -> UserResponse:
        """Fetch one user including the experience history."""
        return UserResponse.model_validate(self._request("GET", f"/user/{user_id}"))

    def join(self, user_id: str, community_id: str) -> MessageResponse:
        """Ask the API to move ``user_id`` into ``community_id``."""
        return MessageResponse.model_validate(
            self._request("POST", f"/user/{user_id}/join/{community_id}")
        )

    def leave(self, user_id: str, community_id: str) -> MessageResponse:
        """Ask the API to remove ``user_id`` from ``community_id``."""
        return MessageResponse.model_validate(
            self._request("DELETE", f"/user/{user_id}/leave/{community_id}")
        )


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        return str(payload.get("detail") or payload.get("message") or payload)
    return str(payload)

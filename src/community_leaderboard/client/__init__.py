"""Terminal client for the leaderboard API."""

from .http import ClientError, LeaderboardClient
from .render import render_leaderboard

__all__ = ["ClientError", "LeaderboardClient", "render_leaderboard"]

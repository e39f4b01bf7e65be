"""Community membership and experience leaderboard service."""

__version__ = "1.0.0"

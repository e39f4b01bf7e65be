"""Plain-text rendering of the leaderboard and client notifications."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from community_leaderboard.schemas import LeaderboardEntry

HEADERS = ("Rank", "Community", "Logo", "Experience", "Members")
LOADING_TEXT = "Loading..."


def render_leaderboard(entries: Sequence[LeaderboardEntry]) -> str:
    """Return the leaderboard as an aligned text table."""
    rows = [
        (
            str(entry.rank),
            entry.name,
            entry.logo or "-",
            str(entry.total_experience),
            str(entry.member_count),
        )
        for entry in entries
    ]
    widths = [
        max(len(header), *(len(row[i]) for row in rows)) if rows else len(header)
        for i, header in enumerate(HEADERS)
    ]
    lines = [_format_row(HEADERS, widths), _format_row(tuple("-" * w for w in widths), widths)]
    lines.extend(_format_row(row, widths) for row in rows)
    return "\n".join(lines)


def render_error(message: str) -> str:
    """Return the error state shown instead of the table."""
    return f"Error: {message}"


def _format_row(cells: Sequence[str], widths: Sequence[int]) -> str:
    return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()


def notify_success(message: str, stream: TextIO | None = None) -> None:
    print(f"[leaderboard] {message}", file=stream or sys.stdout)


def notify_error(message: str, stream: TextIO | None = None) -> None:
    print(f"[leaderboard][ERROR] {message}", file=stream or sys.stderr)

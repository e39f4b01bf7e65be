#!/usr/bin/env python3
"""
Terminal front end for the leaderboard API.

Typical usage:
  community-leaderboard leaderboard
  community-leaderboard join --email ada@example.com --community "Night Owls"
  community-leaderboard leave --email ada@example.com --community "Night Owls"

Exit code:
  0 = request succeeded
  1 = the API reported an error or could not be reached
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from community_leaderboard.core.logging_config import configure_logging
from community_leaderboard.core.settings import settings

from .http import ClientError, LeaderboardClient
from .render import LOADING_TEXT, notify_error, notify_success, render_error, render_leaderboard

JOIN_SUCCESS = "Successfully joined the community"
LEAVE_SUCCESS = "Successfully left the community"


def resolve_user_id(client: LeaderboardClient, email: str) -> str:
    """Pick the user whose email matches, as the user dropdown would."""
    for user in client.users():
        if user.email == email:
            return user.id
    raise ClientError(f"No user with email {email!r}")


def resolve_community_id(client: LeaderboardClient, name: str) -> str:
    """Pick the community whose name matches, as the community dropdown would."""
    for community in client.communities():
        if community.name == name:
            return community.id
    raise ClientError(f"No community named {name!r}")


def show_leaderboard(client: LeaderboardClient) -> int:
    print(LOADING_TEXT)
    try:
        entries = client.leaderboard()
    except ClientError as exc:
        print(render_error(str(exc)))
        return 1
    print(render_leaderboard(entries))
    return 0


def change_membership(
    client: LeaderboardClient,
    args: argparse.Namespace,
    action: Callable[[str, str], object],
    success_message: str,
) -> int:
    try:
        user_id = args.user_id or resolve_user_id(client, args.email)
        community_id = args.community_id or resolve_community_id(client, args.community)
        action(user_id, community_id)
    except ClientError as exc:
        notify_error(f"Error: {exc}")
        return 1
    notify_success(success_message)
    return 0


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    user = parser.add_mutually_exclusive_group(required=True)
    user.add_argument("--email", help="Select the user by email")
    user.add_argument("--user-id", help="Select the user by id")
    community = parser.add_mutually_exclusive_group(required=True)
    community.add_argument("--community", help="Select the community by name")
    community.add_argument("--community-id", help="Select the community by id")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Community leaderboard client")
    parser.add_argument(
        "--base-url",
        default=settings.api_base_url,
        help="API base URL (defaults to LEADERBOARD_API_URL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("leaderboard", help="Show the ranked community list")
    _add_selection_arguments(sub.add_parser("join", help="Join a community"))
    _add_selection_arguments(sub.add_parser("leave", help="Leave a community"))
    return parser


def main(argv: Sequence[str] | None = None, *, client: LeaderboardClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("WARNING")

    owned = client is None
    client = client or LeaderboardClient(args.base_url)
    try:
        if args.command == "leaderboard":
            return show_leaderboard(client)
        if args.command == "join":
            return change_membership(client, args, client.join, JOIN_SUCCESS)
        return change_membership(client, args, client.leave, LEAVE_SUCCESS)
    finally:
        if owned:
            client.close()


if __name__ == "__main__":
    sys.exit(main())

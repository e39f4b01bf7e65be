"""Tests for canonical identifier handling."""

import pytest

from community_leaderboard.core.ids import (
    InvalidIdentifierError,
    new_id,
    normalize_id,
    same_id,
)


def test_new_id_is_canonical() -> None:
    value = new_id()
    assert normalize_id(value) == value
    assert len(value) == 24


def test_normalize_accepts_case_whitespace_and_bytes() -> None:
    raw = bytes(range(12))
    canonical = raw.hex()
    assert normalize_id(f"  {canonical.upper()} ") == canonical
    assert normalize_id(raw) == canonical


@pytest.mark.parametrize("value", ["", "xyz", "a" * 23, "g" * 24, b"short", 12345])
def test_normalize_rejects_garbage(value) -> None:
    with pytest.raises(InvalidIdentifierError):
        normalize_id(value)


def test_same_id_across_representations() -> None:
    raw = bytes.fromhex("ab" * 12)
    assert same_id(raw, "AB" * 12)
    assert not same_id(None, "ab" * 12)
    assert not same_id("ab" * 12, "cd" * 12)
    assert not same_id("garbage", "garbage")

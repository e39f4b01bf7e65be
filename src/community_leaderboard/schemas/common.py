"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field


def wire_field(name: str, wire_name: str, default: Any = ..., **kwargs: Any) -> Any:
    """Declare a field stored as ``name`` in Python and ``wire_name`` in JSON.

    Both spellings are accepted on input so the same schema can read ORM
    objects and decode API payloads.
    """
    if "default_factory" not in kwargs:
        kwargs["default"] = default
    return Field(
        validation_alias=AliasChoices(name, wire_name),
        serialization_alias=wire_name,
        **kwargs,
    )


class MessageResponse(BaseModel):
    """Acknowledgement returned by mutating endpoints."""

    message: str = Field(..., description="Human-readable outcome")

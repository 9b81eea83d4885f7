"""Core data models for dialogue trees.

Uses Pydantic v2 for validation, ULID for sortable unique IDs.
Field names are snake_case in Python and camelCase on the wire
(``updatedAt``, ``nextNodeId``, ``nextNodeName``); both are accepted.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from ulid import ULID

from .constants import END_NODE_NAME


def generate_id() -> str:
    """Generate a ULID (sortable, unique identifier)."""
    return str(ULID())


def utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Line(_WireModel):
    """A single piece of dialogue inside a node. Carries no graph edges."""

    id: str = Field(default_factory=generate_id)
    condition: str | None = None  # guard expression
    character: str | None = None  # speaker
    dialogue: str = ""
    mutation: str | None = None  # side-effect expression


class Option(_WireModel):
    """A player-facing branch out of a node.

    ``next_node_id`` of None ends the conversation. ``next_node_name`` is a
    denormalized copy of the target's name and may be stale after a rename;
    see ``links.resolve_link`` for the live value.
    """

    id: str = Field(default_factory=generate_id)
    condition: str | None = None
    prompt: str | None = None
    next_node_id: str | None = None
    next_node_name: str | None = None

    @model_validator(mode="after")
    def default_end_name(self) -> "Option":
        if self.next_node_id is None and self.next_node_name is None:
            self.next_node_name = END_NODE_NAME
        return self

    @property
    def ends_conversation(self) -> bool:
        return self.next_node_id is None


class Node(_WireModel):
    """A conversation state: dialogue lines plus outgoing options."""

    id: str = Field(default_factory=generate_id)
    name: str
    updated_at: datetime | None = None
    lines: list[Line] = Field(default_factory=list)
    options: list[Option] = Field(default_factory=list)

    @field_validator("lines", "options", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    def to_summary(self) -> dict:
        """Return a compact summary of this node."""
        return {
            "id": self.id,
            "name": self.name,
            "line_count": len(self.lines),
            "option_count": len(self.options),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

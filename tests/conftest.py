"""Shared test fixtures and helpers for dialoguegraph tests."""

import json
from datetime import datetime, timezone

import pytest

from dialoguegraph.models import Line, Node, Option


# --- Helper Functions (not fixtures) ---


def make_node(id: str, name: str, options=None, lines=None, updated_at=None) -> Node:
    """Build a node with the given options and lines."""
    return Node(
        id=id,
        name=name,
        updated_at=updated_at,
        lines=lines or [],
        options=options or [],
    )


def make_option(id: str, next_node_id: str | None = None, next_node_name: str | None = None,
                prompt: str | None = None, condition: str | None = None) -> Option:
    """Build an option pointing at ``next_node_id`` (None = end conversation)."""
    return Option(
        id=id,
        next_node_id=next_node_id,
        next_node_name=next_node_name,
        prompt=prompt,
        condition=condition,
    )


def link(id: str, target: Node, prompt: str | None = None) -> Option:
    """Build an option linking to ``target`` with an up-to-date name cache."""
    return make_option(id, target.id, target.name, prompt=prompt)


# --- Fixtures ---


@pytest.fixture
def tavern_nodes():
    """A small conversation: greeting -> rumours/quest -> farewell, plus an ending."""
    farewell = make_node(
        "n-farewell", "Farewell",
        lines=[Line(id="l-bye", character="Innkeeper", dialogue="Safe travels.")],
        options=[make_option("o-end", prompt="Leave")],
        updated_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
    )
    rumours = make_node(
        "n-rumours", "Rumours",
        lines=[Line(id="l-rumour", character="Innkeeper",
                    dialogue="They say a dragon sleeps in the hills.")],
        options=[link("o-rumours-bye", farewell, prompt="Thanks")],
    )
    quest = make_node(
        "n-quest", "Quest",
        lines=[Line(id="l-quest", character="Innkeeper", dialogue="Bring me the dragon's egg.",
                    condition="reputation > 2", mutation="quest_started = true")],
        options=[
            link("o-quest-accept", farewell, prompt="I accept"),
            make_option("o-quest-ask", "n-missing", "Reward", prompt="What's the reward?"),
        ],
    )
    greeting = make_node(
        "n-greeting", "Greeting",
        lines=[Line(id="l-hello", character="Innkeeper", dialogue="Welcome, traveller!")],
        options=[
            link("o-greet-rumours", rumours, prompt="Heard any rumours?"),
            link("o-greet-quest", quest, prompt="Any work?"),
            link("o-greet-bye", farewell, prompt="Goodbye"),
        ],
        updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    return [greeting, rumours, quest, farewell]


@pytest.fixture
def nodes_file(tmp_path, tavern_nodes):
    """Write tavern_nodes to a camelCase JSON file and return its path."""
    path = tmp_path / "nodes.json"
    data = [n.model_dump(mode="json", by_alias=True) for n in tavern_nodes]
    path.write_text(json.dumps(data, indent=2))
    return path

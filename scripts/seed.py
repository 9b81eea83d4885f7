#!/usr/bin/env python3
"""Seed script to write a sample dialogue tree for trying out the CLI.

Usage:
    DIALOGUEGRAPH_FILE=/path/to/nodes.json python scripts/seed.py
    dialoguegraph --file /path/to/nodes.json check

    # Or with default path (./nodes.json):
    python scripts/seed.py
"""

import json
import os
from pathlib import Path

from dialoguegraph.constants import DEFAULT_FILE_NAME, FILE_ENV_VAR
from dialoguegraph.models import Line, Node, Option, utc_now


def _link(prompt: str, target: Node, condition: str | None = None) -> Option:
    return Option(prompt=prompt, next_node_id=target.id, next_node_name=target.name,
                  condition=condition)


def build_sample_tree() -> list[Node]:
    """A guard at a city gate, with one dangling link left in on purpose."""
    now = utc_now()

    turn_away = Node(
        name="Turned Away",
        updated_at=now,
        lines=[Line(character="Guard", dialogue="Come back when you have papers.")],
        options=[Option(prompt="Leave")],
    )
    enter = Node(
        name="Enter City",
        updated_at=now,
        lines=[
            Line(character="Guard", dialogue="Welcome to Highmoor.",
                 mutation="visited_highmoor = true"),
        ],
        options=[Option(prompt="Walk through the gate")],
    )
    bribe = Node(
        name="Bribe",
        lines=[Line(character="Guard", dialogue="I didn't see anything.",
                    condition="gold >= 10", mutation="gold -= 10")],
        options=[
            _link("Thanks", enter),
            # Points at a node nobody has written yet
            Option(prompt="Ask about the smugglers", next_node_id="missing-smugglers",
                   next_node_name="Smugglers"),
        ],
    )
    gate = Node(
        name="City Gate",
        updated_at=now,
        lines=[
            Line(character="Guard", dialogue="Halt! Papers, please."),
            Line(dialogue="The guard eyes your purse.", condition="gold >= 10"),
        ],
        options=[
            _link("Show papers", enter, condition="has_papers"),
            _link("Offer a bribe", bribe, condition="gold >= 10"),
            _link("I have no papers", turn_away),
        ],
    )
    return [gate, bribe, enter, turn_away]


def main() -> None:
    path = Path(os.environ.get(FILE_ENV_VAR, DEFAULT_FILE_NAME))
    nodes = build_sample_tree()
    data = [node.model_dump(mode="json", by_alias=True) for node in nodes]
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"Wrote {len(nodes)} nodes to {path}")


if __name__ == "__main__":
    main()

"""Derived lookup indices over a node collection.

Indices are rebuilt from scratch on every call; they are a pure function of
the nodes passed in and are never patched incrementally.
"""

import logging
from typing import Sequence

from .models import Node
from .utils import key_by

logger = logging.getLogger(__name__)


def get_nodes_by_option_id(nodes: Sequence[Node] | None) -> dict[str, Node]:
    """Map every option id to the node that owns it (not the node it targets).

    If two options share an id, the later node wins and a warning is logged.
    """
    by_option_id: dict[str, Node] = {}
    for node in nodes or []:
        for option in node.options:
            previous = by_option_id.get(option.id)
            if previous is not None and previous is not node:
                logger.warning(
                    f"Duplicate option id {option.id} in nodes "
                    f"'{previous.name}' and '{node.name}'; keeping '{node.name}'"
                )
            by_option_id[option.id] = node
    return by_option_id


def get_nodes_by_id(nodes: Sequence[Node] | None) -> dict[str, Node]:
    """Map node id to node."""
    return key_by(lambda node: node.id, nodes)


def find_duplicate_option_ids(nodes: Sequence[Node] | None) -> list[str]:
    """Return option ids used more than once, in first-seen order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for node in nodes or []:
        for option in node.options:
            if option.id in seen and option.id not in duplicates:
                duplicates.append(option.id)
            seen.add(option.id)
    return duplicates

"""Indexed, read-only view of one node collection.

A GraphSnapshot is built once per collection and discarded after the next
mutation; callers take a fresh snapshot rather than updating one in place.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .exceptions import NodeNotFoundError, SnapshotError
from .index import find_duplicate_option_ids, get_nodes_by_id, get_nodes_by_option_id
from .links import (
    LinkTarget,
    find_dangling_options,
    find_link_pairs,
    find_links_to_node,
    find_referrers,
    find_stale_links,
    resolve_link,
)
from .models import Node, Option
from .search import SearchHit, filter_nodes, search_nodes

logger = logging.getLogger(__name__)


@dataclass
class GraphSnapshot:
    """Node collection plus derived indices.

    Indices for O(1) lookups:
    - _by_id: node ID -> Node
    - _by_option_id: option ID -> owning Node
    """

    nodes: list[Node] = field(default_factory=list)

    _by_id: dict[str, Node] = field(default_factory=dict)
    _by_option_id: dict[str, Node] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.nodes is None:
            self.nodes = []
        self._rebuild_indices()

    def _rebuild_indices(self) -> None:
        self._by_id = get_nodes_by_id(self.nodes)
        self._by_option_id = get_nodes_by_option_id(self.nodes)

    # --- Lookups ---

    def node(self, node_id: str) -> Node | None:
        return self._by_id.get(node_id)

    def owner_of(self, option_id: str) -> Node | None:
        """Node that owns the option (not the option's target)."""
        return self._by_option_id.get(option_id)

    def find(self, ref: str) -> Node:
        """Look up a node by id, then by exact name.

        Raises:
            NodeNotFoundError: If nothing matches
        """
        if ref in self._by_id:
            return self._by_id[ref]
        for node in self.nodes:
            if node.name == ref:
                return node
        raise NodeNotFoundError(ref)

    def resolve(self, option: Option) -> LinkTarget:
        return resolve_link(option, self._by_id)

    # --- Queries ---

    def links_to(self, target: Node | None) -> list[str]:
        return find_links_to_node(target, self.nodes)

    def link_pairs(self, target: Node | None) -> list[tuple[Node, Option]]:
        return find_link_pairs(target, self.nodes)

    def referrers(self, target: Node | None) -> list[Node]:
        return find_referrers(target, self.nodes)

    def filter(self, query: str | None) -> list[Node]:
        return filter_nodes(query, self.nodes)

    def search(self, query: str | None) -> list[SearchHit]:
        return search_nodes(query, self.nodes)

    def dangling(self) -> list[tuple[Node, Option]]:
        return find_dangling_options(self.nodes)

    def stale(self) -> list[tuple[Node, Option, str]]:
        return find_stale_links(self.nodes)

    def duplicate_option_ids(self) -> list[str]:
        return find_duplicate_option_ids(self.nodes)

    def stats(self) -> dict:
        """Counts for a status line."""
        return {
            "nodes": len(self.nodes),
            "lines": sum(len(n.lines) for n in self.nodes),
            "options": sum(len(n.options) for n in self.nodes),
            "endings": sum(1 for n in self.nodes for o in n.options if o.ends_conversation),
        }

    def check_index_consistency(self) -> list[str]:
        """Validate that indices match the node list. Returns list of errors.

        An empty list means indices are consistent.
        """
        errors: list[str] = []

        # 1. _by_id covers exactly the node ids
        expected_ids = {n.id for n in self.nodes}
        missing = expected_ids - set(self._by_id)
        extra = set(self._by_id) - expected_ids
        if missing:
            errors.append(f"_by_id missing nodes: {missing}")
        if extra:
            errors.append(f"_by_id has stale entries: {extra}")

        # 2. One _by_option_id entry per option, pointing at its owner
        option_count = sum(len(n.options) for n in self.nodes)
        if len(self._by_option_id) != option_count:
            errors.append(
                f"_by_option_id has {len(self._by_option_id)} entries, "
                f"expected {option_count}"
            )
        for node in self.nodes:
            for option in node.options:
                owner = self._by_option_id.get(option.id)
                if owner is None:
                    errors.append(f"_by_option_id missing option {option.id}")
                elif owner is not node:
                    errors.append(
                        f"_by_option_id[{option.id}] points to '{owner.name}', "
                        f"expected '{node.name}'"
                    )

        return errors


def snapshot_from_data(data: Any, source: str = "<data>") -> GraphSnapshot:
    """Validate a list of node dicts (or ``{"nodes": [...]}``) into a snapshot.

    Raises:
        SnapshotError: If the data is not a node list or fails validation
    """
    if isinstance(data, dict):
        data = data.get("nodes")
    if data is None:
        data = []
    if not isinstance(data, list):
        raise SnapshotError(source, "expected a list of nodes")

    try:
        nodes = [Node.model_validate(item) for item in data]
    except ValidationError as e:
        raise SnapshotError(source, str(e)) from e

    snapshot = GraphSnapshot(nodes=nodes)
    logger.debug(f"Loaded {len(nodes)} nodes from {source}")
    return snapshot


def load_snapshot(path: Path) -> GraphSnapshot:
    """Read a JSON node collection from disk.

    Raises:
        SnapshotError: If the file is missing, not JSON, or not a node list
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(str(path), e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise SnapshotError(str(path), f"invalid JSON ({e.msg} at line {e.lineno})") from e
    return snapshot_from_data(data, source=str(path))

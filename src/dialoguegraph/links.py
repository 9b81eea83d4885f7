"""Forward and reverse link resolution between nodes.

Nodes hold no back-references. Reverse queries ("what points here?") scan
every option's forward edge, in collection order then option order.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Mapping, Sequence

from .constants import END_NODE_NAME
from .index import get_nodes_by_id
from .models import Node, Option

logger = logging.getLogger(__name__)

LinkStatus = Literal["end", "linked", "missing"]


@dataclass(frozen=True)
class LinkTarget:
    """Where an option leads.

    - status "end": the option ends the conversation
    - status "linked": ``node`` is the live target
    - status "missing": the target id does not exist (dangling link)
    """

    status: LinkStatus
    node: Node | None
    name: str

    @property
    def exists(self) -> bool:
        return self.status != "missing"


def find_links_to_node(target: Node | None, nodes: Sequence[Node] | None) -> list[str]:
    """Return ids of every option whose ``next_node_id`` is ``target.id``.

    The target's own options are included. Order follows the collection,
    then each node's option order.
    """
    return [option.id for _, option in find_link_pairs(target, nodes)]


def find_link_pairs(target: Node | None, nodes: Sequence[Node] | None) -> list[tuple[Node, Option]]:
    """Return (owner, option) for every option leading to ``target``.

    Same order as ``find_links_to_node``. Owners come from the scan itself, so
    duplicated option ids still report the right source node.
    """
    if target is None or not nodes:
        return []
    return [
        (node, option)
        for node in nodes
        for option in node.options
        if option.next_node_id == target.id
    ]


def find_referrers(target: Node | None, nodes: Sequence[Node] | None) -> list[Node]:
    """Return the distinct nodes owning a link to ``target``, in discovery order."""
    if target is None or not nodes:
        return []
    return [
        node for node in nodes
        if any(option.next_node_id == target.id for option in node.options)
    ]


def resolve_link(option: Option, nodes_by_id: Mapping[str, Node]) -> LinkTarget:
    """Resolve an option against the live graph.

    The target's current name wins over the cached ``next_node_name``; the
    cache is only used to label a missing target.
    """
    if option.next_node_id is None:
        return LinkTarget("end", None, END_NODE_NAME)

    node = nodes_by_id.get(option.next_node_id)
    if node is None:
        logger.debug(f"Option {option.id} links to missing node {option.next_node_id}")
        return LinkTarget("missing", None, option.next_node_name or option.next_node_id)

    return LinkTarget("linked", node, node.name)


def find_dangling_options(nodes: Sequence[Node] | None) -> list[tuple[Node, Option]]:
    """Return (owner, option) pairs whose target node does not exist."""
    by_id = get_nodes_by_id(nodes)
    return [
        (node, option)
        for node in nodes or []
        for option in node.options
        if option.next_node_id is not None and option.next_node_id not in by_id
    ]


def find_stale_links(nodes: Sequence[Node] | None) -> list[tuple[Node, Option, str]]:
    """Return (owner, option, live_name) where the cached target name is out of date."""
    by_id = get_nodes_by_id(nodes)
    stale = []
    for node in nodes or []:
        for option in node.options:
            target = resolve_link(option, by_id)
            if target.status == "linked" and option.next_node_name != target.name:
                stale.append((node, option, target.name))
    return stale


def propagate_rename(
    nodes: Sequence[Node] | None, node_id: str, new_name: str
) -> list[Node]:
    """Rename a node and refresh the cached name on every option targeting it.

    Returns a new list of nodes; the input nodes are left untouched. Nodes
    that need no change are reused as-is.
    """
    renamed: list[Node] = []
    refreshed = 0
    for node in nodes or []:
        options = node.options
        if any(o.next_node_id == node_id for o in options):
            options = [
                o.model_copy(update={"next_node_name": new_name})
                if o.next_node_id == node_id else o
                for o in options
            ]
            refreshed += sum(1 for o in node.options if o.next_node_id == node_id)

        updates: dict = {}
        if options is not node.options:
            updates["options"] = options
        if node.id == node_id:
            updates["name"] = new_name
        renamed.append(node.model_copy(update=updates) if updates else node)

    logger.debug(f"Renamed node {node_id} to '{new_name}', refreshed {refreshed} link(s)")
    return renamed

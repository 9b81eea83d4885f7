"""Free-text search over a node collection.

A node matches a query (case-insensitive substring) when:

1. its name contains the query;
2. one of its lines or options contains the query in a searchable field;
3. one of its options leads to a node matched by rule 1.

Rule 3 is a single hop: a node found through rule 3 does not pull in the
nodes that link to it.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence

from . import constants
from .index import get_nodes_by_id
from .links import resolve_link
from .models import Node

logger = logging.getLogger(__name__)


@dataclass
class SearchHit:
    """A matching node and the reasons it matched."""

    node: Node
    reasons: list[str] = field(default_factory=list)


def _contains(value: str | None, needle: str) -> bool:
    return value is not None and needle in value.lower()


def _content_reasons(node: Node, needle: str) -> list[str]:
    reasons = []
    for line in node.lines:
        for name in constants.LINE_SEARCH_FIELDS:
            reason = f"line.{name}"
            if reason not in reasons and _contains(getattr(line, name), needle):
                reasons.append(reason)
    for option in node.options:
        for name in constants.OPTION_SEARCH_FIELDS:
            reason = f"option.{name}"
            if reason not in reasons and _contains(getattr(option, name), needle):
                reasons.append(reason)
    return reasons


def search_nodes(query: str | None, nodes: Sequence[Node] | None) -> list[SearchHit]:
    """Search nodes and explain each match.

    Results keep the input order. An empty query matches nothing unless
    ``constants.EMPTY_QUERY_MATCHES_ALL`` is set.
    """
    if not nodes:
        return []

    if not (query or "").strip():
        if constants.EMPTY_QUERY_MATCHES_ALL:
            return [SearchHit(node) for node in nodes]
        return []

    needle = query.lower()

    by_id = get_nodes_by_id(nodes)
    named = [node for node in nodes if needle in node.name.lower()]
    named_ids = {node.id for node in named}
    named_names = {node.name for node in named}

    hits = []
    for node in nodes:
        reasons = []
        if node.id in named_ids:
            reasons.append("name")
        reasons.extend(_content_reasons(node, needle))

        for option in node.options:
            if option.next_node_id in named_ids:
                label = by_id[option.next_node_id].name
            else:
                target = resolve_link(option, by_id)
                if target.status == "end" or target.name not in named_names:
                    continue
                label = target.name
            reason = f"links_to:{label}"
            if reason not in reasons:
                reasons.append(reason)

        if reasons:
            hits.append(SearchHit(node, reasons))

    logger.debug(f"Search '{needle}' matched {len(hits)} of {len(nodes)} nodes")
    return hits


def filter_nodes(query: str | None, nodes: Sequence[Node] | None) -> list[Node]:
    """Return the nodes matching ``query``, in their original order."""
    return [hit.node for hit in search_nodes(query, nodes)]


def filter_updated_since(nodes: Sequence[Node] | None, since: datetime) -> list[Node]:
    """Return nodes updated at or after ``since``. Nodes never updated are skipped."""
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    return [
        node for node in nodes or []
        if node.updated_at is not None and _as_utc(node.updated_at) >= since
    ]


def _as_utc(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)

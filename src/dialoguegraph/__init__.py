"""Query and consistency core for dialogue trees.

Public API:
- get_nodes_by_option_id: Map option IDs to their owning nodes
- find_links_to_node: Option IDs that lead to a node
- filter_nodes / search_nodes: Free-text search over nodes, lines and options
- key_by, sort_by, group_by, plural: Grouping and formatting helpers
- GraphSnapshot: Indexed view of one node collection
"""

from .index import find_duplicate_option_ids, get_nodes_by_id, get_nodes_by_option_id
from .links import (
    LinkTarget,
    find_dangling_options,
    find_link_pairs,
    find_links_to_node,
    find_referrers,
    find_stale_links,
    propagate_rename,
    resolve_link,
)
from .models import Line, Node, Option
from .search import SearchHit, filter_nodes, filter_updated_since, search_nodes
from .snapshot import GraphSnapshot, load_snapshot, snapshot_from_data
from .utils import group_by, key_by, plural, sort_by

__all__ = [
    "Line",
    "Node",
    "Option",
    "get_nodes_by_option_id",
    "get_nodes_by_id",
    "find_duplicate_option_ids",
    "find_links_to_node",
    "find_link_pairs",
    "find_referrers",
    "find_dangling_options",
    "find_stale_links",
    "propagate_rename",
    "resolve_link",
    "LinkTarget",
    "filter_nodes",
    "search_nodes",
    "filter_updated_since",
    "SearchHit",
    "GraphSnapshot",
    "load_snapshot",
    "snapshot_from_data",
    "key_by",
    "sort_by",
    "group_by",
    "plural",
]

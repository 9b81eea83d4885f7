"""Shared constants for dialogue graph queries and the CLI."""

# Cached target name stored on options that end the conversation
END_NODE_NAME = "END"

# Search behavior
# When False, an empty or whitespace-only query matches no nodes.
EMPTY_QUERY_MATCHES_ALL = False

# Fields inspected for content matches, in reporting order
LINE_SEARCH_FIELDS = ("condition", "character", "dialogue", "mutation")
OPTION_SEARCH_FIELDS = ("condition", "prompt", "next_node_name")

# CLI
FILE_ENV_VAR = "DIALOGUEGRAPH_FILE"
DEFAULT_FILE_NAME = "nodes.json"
PREVIEW_TEXT_LIMIT = 60

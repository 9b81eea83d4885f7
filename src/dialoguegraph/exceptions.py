"""Exceptions raised outside the pure query functions."""


class DialogueGraphError(Exception):
    """Base exception for dialogue graph operations."""
    pass


class SnapshotError(DialogueGraphError):
    """Raised when a node collection cannot be read or validated."""
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load nodes from {source}: {reason}")


class NodeNotFoundError(DialogueGraphError):
    """Raised when a node reference matches no node by id or name."""
    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Node '{ref}' not found")

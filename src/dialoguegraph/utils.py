"""Grouping, sorting and formatting helpers.

Keys are supplied as accessor callables (``lambda node: node.name``) rather
than field names, so the helpers work on models, dicts and tuples alike.
"""

from typing import Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def key_by(key: Callable[[T], K], items: Iterable[T] | None) -> dict[K, T]:
    """Map ``key(item)`` to item. Later items win on duplicate keys."""
    if not items:
        return {}
    return {key(item): item for item in items}


def group_by(key: Callable[[T], K], items: Iterable[T] | None) -> dict[K, list[T]]:
    """Collect items under ``key(item)``, keeping input order inside each group."""
    groups: dict[K, list[T]] = {}
    for item in items or []:
        groups.setdefault(key(item), []).append(item)
    return groups


def sort_by(key: Callable[[T], object], items: Iterable[T] | None) -> list[T]:
    """Return a new list sorted ascending by ``key(item)``.

    The sort is stable: items with equal keys keep their relative order.
    The input is never modified.
    """
    if not items:
        return []
    return sorted(items, key=key)


def plural(count: int, singular: str, plural_form: str | None = None) -> str:
    """Format ``count`` with the right word form, e.g. "0 things", "1 thing"."""
    if count == 1:
        return f"{count} {singular}"
    word = plural_form if plural_form is not None else singular + "s"
    return f"{count} {word}"

"""Mirrored adjacency for a dependency graph."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class EdgeIndex[T: Hashable]:
    """Both directions of the depends-on relation, kept in sync.

    - ``_dependencies[child] = {parent}`` means "child depends on parent"
    - ``_dependents[parent] = {child}`` means "parent is depended on by child"

    A node with no entry in ``_dependencies`` has no unresolved prerequisites.
    Entries are deleted as soon as they become empty, so key membership alone
    answers "does this node have dependencies?".
    """

    _dependencies: dict[T, set[T]] = field(default_factory=dict)
    _dependents: dict[T, set[T]] = field(default_factory=dict)

    def add(self, child: T, parent: T) -> None:
        """Record that ``child`` depends on ``parent``."""
        self._dependencies.setdefault(child, set()).add(parent)
        self._dependents.setdefault(parent, set()).add(child)

    def remove(self, node: T) -> None:
        """Remove every edge touching ``node``."""
        for dependent in self._dependents.pop(node, ()):
            _discard(self._dependencies, dependent, node)
        for dependency in self._dependencies.pop(node, ()):
            _discard(self._dependents, dependency, node)

    def dependencies(self, node: T) -> frozenset[T]:
        """Direct dependencies of ``node`` (its parents)."""
        return frozenset(self._dependencies.get(node, ()))

    def dependents(self, node: T) -> frozenset[T]:
        """Direct dependents of ``node`` (its children)."""
        return frozenset(self._dependents.get(node, ()))

    def has_dependencies(self, node: T) -> bool:
        return node in self._dependencies

    def edges(self) -> Iterator[tuple[T, T]]:
        """Iterate over ``(child, parent)`` pairs."""
        for child, parents in self._dependencies.items():
            for parent in parents:
                yield child, parent

    def copy(self) -> EdgeIndex[T]:
        """Return an independent copy; later mutations of either side are not shared."""
        return EdgeIndex(
            _dependencies={k: set(v) for k, v in self._dependencies.items()},
            _dependents={k: set(v) for k, v in self._dependents.items()},
        )

    def __len__(self) -> int:
        """Return the number of edges."""
        return sum(len(parents) for parents in self._dependencies.values())


def _discard[T: Hashable](adjacency: dict[T, set[T]], key: T, node: T) -> None:
    nodes = adjacency.get(key)
    if nodes is None:
        return
    nodes.discard(node)
    if not nodes:
        del adjacency[key]

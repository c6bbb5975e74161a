"""Errors raised while declaring or ordering a dependency graph."""

from collections.abc import Hashable, Iterable


class GraphError(Exception):
    """Base class for dependency graph errors."""


class SelfReferenceError(GraphError):
    """Raised when a node is declared to depend on itself."""

    def __init__(self, node: Hashable) -> None:
        self.node = node
        super().__init__(f"Node {node!r} cannot depend on itself")


class CycleError(GraphError):
    """Raised when the graph contains, or would contain, a circular dependency.

    When raised from a declaration, ``child`` and ``parent`` name the rejected
    edge. When raised from an ordering, ``nodes`` lists the nodes that could not
    be ordered because every one of them waits on another.
    """

    def __init__(
        self,
        child: Hashable | None = None,
        parent: Hashable | None = None,
        *,
        nodes: Iterable[Hashable] = (),
    ) -> None:
        self.child = child
        self.parent = parent
        self.nodes = tuple(nodes)
        if self.nodes:
            msg = f"Cycle detected: {len(self.nodes)} node(s) involved in circular dependencies"
        else:
            msg = f"{child!r} -> {parent!r} would create a circular dependency"
        super().__init__(msg)


class LinkConflictError(GraphError):
    """Raised when a link is declared twice with different labels."""

    def __init__(self, from_node: Hashable, to_node: Hashable, existing: str, label: str) -> None:
        self.from_node = from_node
        self.to_node = to_node
        self.existing = existing
        self.label = label
        super().__init__(
            f"Link {from_node!r} -> {to_node!r} is already labelled {existing!r}, cannot relabel as {label!r}",
        )

"""Read-only queries common to graphs and their snapshots."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING

from ._algorithms import transitive_closure

if TYPE_CHECKING:
    from dagsteps._models import Node

    from ._edge_index import EdgeIndex


class GraphView[T: Hashable]:
    """Nodes, edges and link labels with query methods.

    Node order is registration order throughout, which keeps every listing
    reproducible regardless of how the identifiers hash.
    """

    __slots__ = ("_edges", "_labels", "_nodes")

    def __init__(
        self,
        nodes: dict[T, Node[T]],
        edges: EdgeIndex[T],
        labels: Mapping[tuple[T, T], str],
    ) -> None:
        self._nodes = nodes
        self._edges = edges
        self._labels = labels

    def nodes(self) -> list[T]:
        """All node identifiers in registration order."""
        return list(self._nodes)

    def node(self, node_id: T) -> Node[T]:
        """Get the record of a registered node.

        Raises:
            KeyError: If the node is not registered.

        """
        return self._nodes[node_id]

    def leaves(self) -> list[T]:
        """Nodes without dependencies, in registration order."""
        return [n for n in self._nodes if not self._edges.has_dependencies(n)]

    def immediate_dependencies(self, node: T) -> frozenset[T]:
        return self._edges.dependencies(node)

    def immediate_dependents(self, node: T) -> frozenset[T]:
        return self._edges.dependents(node)

    def dependencies(self, node: T) -> frozenset[T]:
        """All nodes that ``node`` transitively depends on.

        Returns an empty set for an unregistered node.
        """
        if node not in self._nodes:
            return frozenset()
        return frozenset(transitive_closure(node, self._edges.dependencies))

    def dependents(self, node: T) -> frozenset[T]:
        """All nodes that transitively depend on ``node``.

        Returns an empty set for an unregistered node.
        """
        if node not in self._nodes:
            return frozenset()
        return frozenset(transitive_closure(node, self._edges.dependents))

    def depends_on(self, child: T, parent: T) -> bool:
        """Check whether ``child`` transitively depends on ``parent``."""
        return parent in self.dependencies(child)

    def has_dependent(self, parent: T, child: T) -> bool:
        """Check whether ``child`` transitively depends on ``parent``, queried from the parent side."""
        return child in self.dependents(parent)

    def link_label(self, from_node: T, to_node: T) -> str | None:
        """Label of the link ``from_node -> to_node``, if one was declared."""
        return self._labels.get((from_node, to_node))

    def edges(self) -> list[tuple[T, T]]:
        """All ``(child, parent)`` pairs."""
        return list(self._edges.edges())

    def __len__(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._nodes
